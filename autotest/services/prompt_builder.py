import json
import re
from typing import Any, Dict, List, Optional

from autotest.models.schemas import Language, TestGenerationRequest, TestType

# How much of the user's input is embedded in prompts
ANALYSIS_EXCERPT_CHARS = 500
GENERATION_EXCERPT_CHARS = 800
ANALYSIS_SUMMARY_CHARS = 600

ANALYSIS_SYSTEM_SUFFIX = "Return ONLY valid JSON without markdown formatting."

TESTING_FRAMEWORKS = {
    Language.JAVA: "JUnit 5 with Mockito",
    Language.PYTHON: "pytest with unittest.mock",
    Language.JAVASCRIPT: "Jest with testing-library",
}

API_TESTING_LIBRARIES = {
    Language.JAVA: "RestAssured with TestNG",
    Language.PYTHON: "requests with pytest",
    Language.JAVASCRIPT: "axios with Jest",
}

FILE_EXTENSIONS = {
    Language.JAVA: "java",
    Language.PYTHON: "py",
    Language.JAVASCRIPT: "js",
}

FILENAME_PREFIXES = {
    TestType.UNIT: "test",
    TestType.API: "api-test",
    TestType.UI: "ui-test",
}

DEFAULT_DEPENDENCIES = {
    Language.JAVA: {
        TestType.UNIT: ["junit-jupiter", "mockito-core", "assertj-core"],
        TestType.BDD: ["cucumber-java", "cucumber-junit", "rest-assured"],
        TestType.API: ["rest-assured", "testng", "hamcrest"],
        TestType.UI: ["selenium-java", "webdrivermanager", "testng"],
        TestType.PERFORMANCE: ["apache-jmeter", "rest-assured", "micrometer-core"],
    },
    Language.PYTHON: {
        TestType.UNIT: ["pytest", "unittest.mock", "pytest-mock"],
        TestType.BDD: ["behave", "requests", "pytest-bdd"],
        TestType.API: ["requests", "pytest", "jsonschema"],
        TestType.UI: ["selenium", "pytest", "webdriver-manager"],
        TestType.PERFORMANCE: ["locust", "requests", "pytest"],
    },
    Language.JAVASCRIPT: {
        TestType.UNIT: ["jest", "@testing-library/react", "@testing-library/jest-dom"],
        TestType.BDD: ["cucumber", "axios", "chai"],
        TestType.API: ["axios", "jest", "supertest"],
        TestType.UI: ["selenium-webdriver", "jest", "webdriver-manager"],
        TestType.PERFORMANCE: ["artillery", "axios", "jest"],
    },
}


def get_testing_framework(language: Language) -> str:
    return TESTING_FRAMEWORKS.get(language, "appropriate testing framework")


def get_api_testing_library(language: Language) -> str:
    return API_TESTING_LIBRARIES.get(language, "HTTP client library")


def get_file_extension(language: Language) -> str:
    return FILE_EXTENSIONS.get(language, "txt")


def get_default_dependencies(test_type: TestType, language: Language) -> List[str]:
    return list(DEFAULT_DEPENDENCIES.get(language, {}).get(test_type, []))


def item_names(items: Any) -> List[str]:
    """Names from a loosely shaped model list; objects contribute their ``name``."""
    if not isinstance(items, list):
        return []
    names = []
    for item in items:
        if isinstance(item, dict):
            item = item.get("name") or item.get("methodName") or item.get("className")
        if item:
            names.append(str(item))
    return names


def extract_base_name(input_data: str, test_type: TestType) -> str:
    """First three words longer than two characters, dash-joined."""
    words = re.sub(r"[^a-z0-9\s]", " ", (input_data or "").lower()).split()
    name = "-".join([w for w in words if len(w) > 2][:3])
    return name or f"{test_type.value}-case"


def generate_filename(test_type: TestType, language: Language, input_data: str) -> str:
    base_name = extract_base_name(input_data, test_type)
    if test_type == TestType.BDD:
        return f"{base_name}.feature"
    if test_type == TestType.PERFORMANCE:
        return f"{base_name}.jmx"
    prefix = FILENAME_PREFIXES.get(test_type, "test")
    return f"{prefix}-{base_name}.{get_file_extension(language)}"


def get_system_prompt(test_type: TestType, language: Language) -> str:
    base = "You are an expert test automation engineer. Generate production-ready, comprehensive test code."
    lang = language.value
    prompts = {
        TestType.BDD: (
            f"{base} For BDD tests: Use proper Gherkin syntax with Given-When-Then structure. "
            "Include multiple scenarios covering happy path, edge cases, and error conditions."
        ),
        TestType.UNIT: (
            f"{base} For Unit tests in {lang}: Use {get_testing_framework(language)} framework. "
            "Include proper setup and teardown methods. Test all public methods and edge cases."
        ),
        TestType.API: (
            f"{base} For API tests in {lang}: Use {get_api_testing_library(language)} for HTTP requests. "
            "Test all HTTP methods. Validate response status codes, headers, and body."
        ),
        TestType.UI: (
            f"{base} For UI tests in {lang}: Use Selenium WebDriver with Page Object Model pattern. "
            "Include explicit waits and proper element locators."
        ),
        TestType.PERFORMANCE: (
            f"{base} For Performance tests: Create JMeter test plans or {lang} performance scripts. "
            "Include ramp-up, steady state, and ramp-down phases."
        ),
    }
    return prompts.get(test_type, base)


def summarize_analysis(analysis: Dict[str, Any]) -> str:
    """Compact JSON of the analysis, capped so prompts stay small."""
    try:
        text = json.dumps(analysis, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        text = str(analysis)
    return text[:ANALYSIS_SUMMARY_CHARS]


def _context_lines(request: TestGenerationRequest) -> str:
    lines = []
    if request.framework:
        lines.append(f"- Preferred framework: {request.framework}")
    if request.testing_library:
        lines.append(f"- Preferred testing library: {request.testing_library}")
    if request.additional_context:
        lines.append(f"- Additional context: {request.additional_context[:300]}")
    return "\n".join(lines)


# --- Analysis prompts -------------------------------------------------------

def build_input_analysis_prompt(request: TestGenerationRequest) -> str:
    return f"""Analyze this {request.input_type.value}: {request.input_data[:ANALYSIS_EXCERPT_CHARS]}...

Provide brief analysis in JSON format:
{{
  "complexity": "low|medium|high",
  "testableComponents": ["component1", "component2"],
  "riskAreas": ["area1", "area2"]
}}"""


def build_git_repository_prompt(repo_url: str) -> str:
    return f"""Analyze this Git repository URL: {repo_url}

Provide analysis in JSON format:
{{
  "structure": {{"projectType": "maven", "mainPackages": ["com.example"]}},
  "dependencies": ["spring-boot", "junit"],
  "frameworks": ["Spring Boot"],
  "testableClasses": [{{"className": "UserService", "package": "com.example", "methods": ["createUser"]}}],
  "apiEndpoints": [{{"path": "/api/users", "method": "POST"}}],
  "complexity": "medium"
}}"""


def build_postman_prompt(collection: Any) -> str:
    return f"""Analyze this Postman collection: {json.dumps(collection)}

Provide analysis in JSON format:
{{
  "endpoints": [{{"name": "Create User", "method": "POST", "url": "/api/users"}}],
  "workflows": [{{"name": "User CRUD", "steps": ["Create", "Read"]}}]
}}"""


def build_web_page_prompt(web_url: str) -> str:
    return f"""Analyze this web page URL: {web_url}

Provide analysis in JSON format:
{{
  "pageType": "login",
  "elements": [{{"type": "input", "id": "email", "selector": "#email"}}],
  "workflows": [{{"name": "Login", "steps": ["Enter email", "Submit"]}}]
}}"""


def build_uploaded_files_prompt(file_count: int, summary: List[Dict[str, Any]]) -> str:
    return f"""Analyze this uploaded project with {file_count} files:

Files Summary: {json.dumps(summary, indent=2)}

Provide comprehensive analysis in JSON format:
{{
  "structure": {{
    "projectType": "maven|gradle|npm|django|rails",
    "mainLanguage": "java|python|javascript",
    "architecture": "mvc|microservices|monolith"
  }},
  "testableClasses": [
    {{
      "className": "UserService",
      "package": "com.example.service",
      "methods": ["createUser", "findUser"],
      "complexity": "medium",
      "priority": "high"
    }}
  ],
  "testingStrategy": {{
    "unitTests": 15,
    "integrationTests": 5,
    "e2eTests": 3
  }},
  "complexity": "medium"
}}"""


# --- Generation prompts -----------------------------------------------------

_KIND_REQUIREMENTS = {
    TestType.UNIT: lambda lang: [
        f"Use {get_testing_framework(lang)}",
        "Include setup, test methods, and assertions",
        "Test positive and negative cases",
        "Follow best practices",
    ],
    TestType.BDD: lambda lang: [
        "Use Gherkin syntax (Given-When-Then)",
        "Include multiple scenarios",
        "Add examples for data-driven testing",
        "Cover positive and negative cases",
    ],
    TestType.API: lambda lang: [
        "Test HTTP methods (GET, POST, PUT, DELETE)",
        "Validate status codes and response body",
        "Include authentication testing",
        "Test error scenarios",
    ],
    TestType.UI: lambda lang: [
        "Use Selenium WebDriver",
        "Implement Page Object Model",
        "Test user interactions and validations",
        "Include cross-browser support",
    ],
    TestType.PERFORMANCE: lambda lang: [
        "Create load testing scenarios",
        "Include response time monitoring",
        "Test concurrent users",
        "Generate performance reports",
    ],
}

_KIND_HEADLINES = {
    TestType.UNIT: "Generate a {lang} unit test for",
    TestType.BDD: "Generate a BDD feature file for",
    TestType.API: "Generate {lang} API tests for",
    TestType.UI: "Generate {lang} UI tests for",
    TestType.PERFORMANCE: "Generate performance tests for",
}

_KIND_CLOSERS = {
    TestType.UNIT: "Generate complete test code.",
    TestType.BDD: "Generate complete feature file.",
    TestType.API: "Generate complete API test code.",
    TestType.UI: "Generate complete UI test code.",
    TestType.PERFORMANCE: "Generate complete performance test code.",
}


def build_generation_prompt(
    request: TestGenerationRequest, test_type: TestType, analysis: Dict[str, Any]
) -> str:
    headline = _KIND_HEADLINES[test_type].format(lang=request.language.value)
    requirements = "\n".join(f"- {r}" for r in _KIND_REQUIREMENTS[test_type](request.language))
    context = _context_lines(request)
    prompt = f"""{headline}: {request.input_data[:GENERATION_EXCERPT_CHARS]}

Analysis: {summarize_analysis(analysis)}

Requirements:
{requirements}"""
    if context:
        prompt += f"\n{context}"
    return f"{prompt}\n\n{_KIND_CLOSERS[test_type]}"


def build_class_unit_prompt(
    request: TestGenerationRequest, testable_class: Dict[str, Any], analysis: Dict[str, Any]
) -> str:
    structure = analysis.get("structure") or {}
    return f"""Generate comprehensive {request.language.value} unit tests for this class:

Class: {testable_class.get("className", "TestClass")}
Package: {testable_class.get("package") or "com.example"}
Methods: {", ".join(item_names(testable_class.get("methods"))) or "standard methods"}
Dependencies: {", ".join(item_names(testable_class.get("dependencies"))) or "none"}
Complexity: {testable_class.get("complexity") or "medium"}

Project Context:
- Framework: {", ".join(item_names(analysis.get("frameworks"))) or "Standard"}
- Dependencies: {", ".join(item_names(analysis.get("dependencies"))) or "Standard"}
- Architecture: {structure.get("architecture", "Standard") if isinstance(structure, dict) else "Standard"}

Requirements:
1. Use {get_testing_framework(request.language)}
2. Mock all external dependencies
3. Test all public methods with positive, negative, and edge cases
4. Include proper setup and teardown
5. Use descriptive test names
6. Follow {request.language.value} best practices
7. Include exception testing
8. Add parameterized tests where appropriate

Generate complete, production-ready test class."""


def build_failure_analysis_prompt(logs: str, test_type: TestType, test_code: Optional[str] = None) -> str:
    prompt = f"""Analyze this {test_type.value} test failure: {logs[:1000]}

Provide analysis:
1. Root cause
2. Fix suggestions
3. Prevention strategies"""
    if test_code:
        prompt += f"\n\nTest code:\n{test_code[:1000]}"
    return prompt


ANALYSIS_SYSTEM_PROMPTS = {
    "input": "You are a test analysis expert. Provide concise analysis.",
    "git_repo": "You are a software architect. Provide concise project analysis.",
    "postman_collection": "You are an API testing expert. Provide concise analysis.",
    "web_url": "You are a UI testing expert. Provide concise analysis.",
    "code": "You are an expert software architect specializing in test strategy for large codebases.",
}


def get_analysis_system_prompt(kind: str) -> str:
    return f"{ANALYSIS_SYSTEM_PROMPTS.get(kind, ANALYSIS_SYSTEM_PROMPTS['input'])} {ANALYSIS_SYSTEM_SUFFIX}"
