"""
Static inspection of source files pasted into a ``code`` request.

Uploaded projects arrive as one text blob where every file starts with a
``// File: <name>`` header line. The helpers here split that blob and pull
out the facts the analysis prompt and the fallback analysis need: testable
classes and methods, imported packages, frameworks and HTTP endpoints.
Files posted to the upload endpoint are inspected one by one and summarised
into a project structure.
"""
import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List

FILE_MARKER = "// File:"

MAX_DEPENDENCIES = 20
MAX_ENDPOINTS = 20
MAX_CLASSES = 20

_JAVA_CLASS_RE = re.compile(r"public\s+(?:final\s+|abstract\s+)?class\s+(\w+)")
_JAVA_METHOD_RE = re.compile(r"public\s+[\w<>\[\],\s]+?\s+(\w+)\s*\([^)]*\)\s*(?:throws\s+[\w.,\s]+)?\{")
_PY_CLASS_RE = re.compile(r"^class\s+(\w+)", re.MULTILINE)
_PY_DEF_RE = re.compile(r"^\s*(?:async\s+)?def\s+(\w+)\s*\(", re.MULTILINE)
_JS_CLASS_RE = re.compile(r"class\s+(\w+)")
_JS_FUNCTION_RE = re.compile(r"function\s+(\w+)\s*\(")
_JS_METHOD_RE = re.compile(r"^\s+(?:async\s+)?(\w+)\s*\([^)]*\)\s*\{", re.MULTILINE)
_JS_KEYWORDS = {"if", "for", "while", "switch", "catch", "function", "return", "constructor"}

_JAVA_IMPORT_RE = re.compile(r"import\s+(?:static\s+)?([\w.]+)\s*;")
_PY_IMPORT_RE = re.compile(r"^\s*(?:from\s+([\w.]+)\s+import|import\s+([\w.]+))", re.MULTILINE)
_JS_IMPORT_RE = re.compile(r"""(?:import\s[^'"]*from\s+['"]([^'"]+)['"]|require\(\s*['"]([^'"]+)['"]\s*\))""")

_SPRING_MAPPING_RE = re.compile(r"@(Request|Get|Post|Put|Delete|Patch)Mapping\s*\(([^)]*)\)")
_EXPRESS_ROUTE_RE = re.compile(r"""(?:app|router)\.(get|post|put|delete|patch)\(\s*['"]([^'"]+)['"]""")

_FRAMEWORK_MARKERS = [
    ("Spring Boot", ("@SpringBootApplication", "org.springframework")),
    ("JPA/Hibernate", ("@Entity", "javax.persistence", "jakarta.persistence")),
    ("Spring MVC", ("@RestController", "@RequestMapping")),
    ("Django", ("from django", "import django")),
    ("Flask", ("from flask", "import flask")),
    ("FastAPI", ("from fastapi", "import fastapi")),
    ("React", ("import React", 'from "react"', "from 'react'")),
    ("Vue.js", ("import Vue", 'from "vue"', "from 'vue'")),
    ("Express.js", ("import express", 'from "express"', "require('express')", 'require("express")')),
]

_BUILD_FILES = {"pom.xml": "Maven", "build.gradle": "Gradle", "package.json": "npm/Node.js"}
_INSPECTED_LANGUAGES = {"java", "python", "javascript", "typescript"}


_LANGUAGES = {
    "java": "java",
    "py": "python",
    "js": "javascript",
    "jsx": "javascript",
    "ts": "typescript",
    "tsx": "typescript",
    "cs": "csharp",
    "cpp": "cpp",
    "c": "c",
    "php": "php",
    "rb": "ruby",
    "go": "go",
    "kt": "kotlin",
    "scala": "scala",
    "swift": "swift",
}

# Display names reported for uploaded files
FILE_TYPES = {
    "java": "Java",
    "py": "Python",
    "js": "JavaScript",
    "ts": "TypeScript",
    "jsx": "React JSX",
    "tsx": "React TSX",
    "cs": "C#",
    "cpp": "C++",
    "c": "C",
    "php": "PHP",
    "rb": "Ruby",
    "go": "Go",
    "kt": "Kotlin",
    "scala": "Scala",
    "swift": "Swift",
}


@dataclass
class UploadedFile:
    name: str
    content: str
    language: str
    lines_of_code: int
    testable_elements: List[str] = field(default_factory=list)
    complexity: str = "medium"


def _extension(filename: str) -> str:
    base = filename.rsplit("/", 1)[-1]
    return base.rsplit(".", 1)[-1].lower() if "." in base else ""


def language_from_filename(filename: str) -> str:
    return _LANGUAGES.get(_extension(filename), "unknown")


def file_type(filename: str) -> str:
    return FILE_TYPES.get(_extension(filename), "Unknown")


def is_source_file(filename: str) -> bool:
    return _extension(filename) in _LANGUAGES


def extract_java_elements(content: str) -> List[str]:
    match = _JAVA_CLASS_RE.search(content)
    class_name = match.group(1) if match else "UnknownClass"
    methods = [m for m in _JAVA_METHOD_RE.findall(content) if m != class_name]
    return [class_name] + methods


def extract_python_elements(content: str) -> List[str]:
    match = _PY_CLASS_RE.search(content)
    class_name = match.group(1) if match else "UnknownClass"
    methods = [m for m in _PY_DEF_RE.findall(content) if not m.startswith("__")]
    return [class_name] + methods


def extract_javascript_elements(content: str) -> List[str]:
    match = _JS_CLASS_RE.search(content)
    class_name = match.group(1) if match else "UnknownClass"
    names = _JS_FUNCTION_RE.findall(content) + _JS_METHOD_RE.findall(content)
    seen = []
    for name in names:
        if name not in _JS_KEYWORDS and name not in seen:
            seen.append(name)
    return [class_name] + seen


def _testable_elements(filename: str, content: str) -> List[str]:
    if filename.endswith(".java"):
        return extract_java_elements(content)
    if filename.endswith(".py"):
        return extract_python_elements(content)
    return extract_javascript_elements(content)


def parse_uploaded_files(input_data: str) -> List[UploadedFile]:
    """Split a ``// File:`` blob into files; text before the first marker is ignored."""
    files = []
    for block in input_data.split(FILE_MARKER)[1:]:
        lines = block.strip().split("\n")
        name = lines[0].strip()
        content = "\n".join(lines[1:])
        files.append(
            UploadedFile(
                name=name,
                content=content,
                language=language_from_filename(name),
                lines_of_code=len([line for line in content.split("\n") if line.strip()]),
                testable_elements=_testable_elements(name, content),
            )
        )
    return files


def inspect_file(name: str, content: str) -> UploadedFile:
    """Analyse one uploaded source file; complexity follows its non-blank line count."""
    lines_of_code = len([line for line in content.split("\n") if line.strip()])
    if lines_of_code > 200:
        complexity = "high"
    elif lines_of_code < 50:
        complexity = "low"
    else:
        complexity = "medium"
    language = language_from_filename(name)
    elements = _testable_elements(name, content) if language in _INSPECTED_LANGUAGES else []
    return UploadedFile(
        name=name,
        content=content,
        language=language,
        lines_of_code=lines_of_code,
        testable_elements=elements,
        complexity=complexity,
    )


def project_structure(files: List[UploadedFile]) -> Dict[str, Any]:
    """Language and directory counts, test estimate and recommendations for an upload."""
    languages = Counter(f.language for f in files)
    directories = Counter(f.name.rsplit("/", 1)[0] for f in files if "/" in f.name)
    testable = sum(len(f.testable_elements) for f in files)
    total_loc = sum(f.lines_of_code for f in files)

    if total_loc > 5000:
        complexity = "high"
    elif total_loc < 1000:
        complexity = "low"
    else:
        complexity = "medium"

    recommendations = []
    if len(files) > 50:
        recommendations.append("Consider generating tests in batches for better performance")
    if len(languages) > 2:
        recommendations.append("Multi-language project detected - ensure consistent testing frameworks")
    if complexity == "high":
        recommendations.append("High complexity project - focus on critical path testing first")

    return {
        "totalFiles": len(files),
        "languages": dict(languages),
        "directories": dict(directories),
        "testableClasses": testable,
        "estimatedTestFiles": math.ceil(testable * 0.8),
        "complexity": complexity,
        "recommendations": recommendations,
    }


def combine_files(files: List[UploadedFile]) -> str:
    """Inverse of ``parse_uploaded_files``: one ``// File:`` blob for a ``code`` request."""
    return "\n".join(f"{FILE_MARKER} {f.name}\n{f.content}" for f in files)


def extract_dependencies(files: List[UploadedFile]) -> List[str]:
    """Top-level package names imported by the files, excluding the JDK."""
    dependencies: List[str] = []

    def add(dep: str) -> None:
        if dep and dep not in dependencies:
            dependencies.append(dep)

    for f in files:
        if f.name.endswith(".java"):
            for imported in _JAVA_IMPORT_RE.findall(f.content):
                if not imported.startswith(("java.", "javax.")):
                    add(imported.split(".")[0])
        elif f.name.endswith(".py"):
            for from_mod, import_mod in _PY_IMPORT_RE.findall(f.content):
                module = from_mod or import_mod
                if not module.startswith("."):
                    add(module.split(".")[0])
        elif re.search(r"\.(js|ts|jsx|tsx)$", f.name):
            for es_mod, cjs_mod in _JS_IMPORT_RE.findall(f.content):
                module = es_mod or cjs_mod
                if not module.startswith("."):
                    add(module.split("/")[0])

    return dependencies[:MAX_DEPENDENCIES]


def detect_frameworks(files: List[UploadedFile]) -> List[str]:
    frameworks: List[str] = []
    for f in files:
        for framework, markers in _FRAMEWORK_MARKERS:
            if framework not in frameworks and any(marker in f.content for marker in markers):
                frameworks.append(framework)
        build_tool = _BUILD_FILES.get(f.name.lower().rsplit("/", 1)[-1])
        if build_tool and build_tool not in frameworks:
            frameworks.append(build_tool)
    return frameworks


def extract_api_endpoints(files: List[UploadedFile]) -> List[Dict[str, str]]:
    endpoints = []
    for f in files:
        for kind, args in _SPRING_MAPPING_RE.findall(f.content):
            path = re.search(r"""["']([^"']+)["']""", args)
            if not path:
                continue
            method = {"Post": "POST", "Put": "PUT", "Delete": "DELETE", "Patch": "PATCH"}.get(kind, "GET")
            endpoints.append({"path": path.group(1), "method": method, "file": f.name})
        for method, path in _EXPRESS_ROUTE_RE.findall(f.content):
            endpoints.append({"path": path, "method": method.upper(), "file": f.name})
    return endpoints[:MAX_ENDPOINTS]


def summarize_files(files: List[UploadedFile], limit: int = 10) -> List[Dict[str, Any]]:
    """Compact per-file summary sent to the model instead of raw source."""
    return [
        {
            "name": f.name,
            "type": f.language,
            "elements": f.testable_elements[:5],
            "complexity": f.complexity,
            "linesOfCode": f.lines_of_code,
        }
        for f in files[:limit]
    ]


def fallback_project_analysis(files: List[UploadedFile]) -> Dict[str, Any]:
    """Project analysis derived from the parsed files alone."""
    counts = Counter(f.language for f in files)
    main_language = counts.most_common(1)[0][0] if counts else "java"
    project_type = {"java": "maven", "python": "pip"}.get(main_language, "npm")
    framework = {"java": "Spring Boot", "python": "Django"}.get(main_language, "Express.js")

    testable_classes = []
    for f in files:
        if not f.testable_elements:
            continue
        class_name, methods = f.testable_elements[0], f.testable_elements[1:]
        testable_classes.append(
            {
                "className": class_name,
                "package": f.name.rsplit(".", 1)[0].replace("/", "."),
                "methods": methods or ["testMethod"],
                "complexity": f.complexity,
            }
        )

    if len(files) > 20:
        complexity = "high"
    elif len(files) > 10:
        complexity = "medium"
    else:
        complexity = "low"

    return {
        "structure": {
            "projectType": project_type,
            "mainLanguage": main_language,
            "totalFiles": len(files),
        },
        "dependencies": extract_dependencies(files) or ["junit", "mockito", "assertj"],
        "frameworks": detect_frameworks(files) or [framework],
        "testableClasses": testable_classes[:MAX_CLASSES],
        "apiEndpoints": extract_api_endpoints(files),
        "complexity": complexity,
    }
