import json

import pytest

from autotest.core.exceptions import AIQuotaExceededError, AIServiceError
from autotest.models.schemas import InputType, Language, TestGenerationRequest, TestType
from autotest.services.test_generation_service import TestGenerationService
from tests.conftest import FailingAIService, FakeAIService


def make_request(**overrides) -> TestGenerationRequest:
    values = {"input_data": "Shoppers can apply a discount code at checkout", "test_types": [TestType.UNIT]}
    values.update(overrides)
    return TestGenerationRequest(**values)


@pytest.mark.asyncio
async def test_analysis_then_one_call_per_kind():
    ai = FakeAIService(replies=[json.dumps({"complexity": "high"})])
    service = TestGenerationService(ai)

    tests = await service.generate_tests(make_request(test_types=[TestType.UNIT, TestType.BDD, TestType.API]))

    assert [t.type for t in tests] == [TestType.UNIT, TestType.BDD, TestType.API]
    assert not any(t.template_based for t in tests)
    assert len(ai.calls) == 4
    assert ai.calls[0]["system"].endswith("Return ONLY valid JSON without markdown formatting.")
    assert '"complexity":"high"' in ai.calls[1]["prompt"]


@pytest.mark.asyncio
async def test_provider_failure_yields_minimal_templates():
    service = TestGenerationService(FailingAIService())

    tests = await service.generate_tests(make_request(test_types=[TestType.UNIT, TestType.UI]))

    assert len(tests) == 2
    assert all(t.template_based for t in tests)
    assert tests[0].coverage == ["Test skeleton"]


@pytest.mark.asyncio
async def test_quota_error_uses_basic_template():
    ai = FakeAIService(replies=["{}"], default=AIQuotaExceededError("429"))
    tests = await TestGenerationService(ai).generate_tests(make_request(test_types=[TestType.PERFORMANCE]))

    assert tests[0].filename == "performance-test.jmx"
    assert tests[0].template_based is True


@pytest.mark.asyncio
async def test_empty_completion_counts_as_failure():
    ai = FakeAIService(replies=["{}", "   "])
    tests = await TestGenerationService(ai).generate_tests(make_request())

    assert tests[0].template_based is True


@pytest.mark.asyncio
async def test_unconfigured_provider_skips_model():
    ai = FakeAIService(configured=False)
    tests = await TestGenerationService(ai).generate_tests(
        make_request(test_types=[TestType.UNIT, TestType.API], language=Language.JAVA)
    )

    assert ai.calls == []
    assert [t.filename for t in tests] == [
        "test-shoppers-can-apply.java",
        "api-test-shoppers-can-apply.java",
    ]


@pytest.mark.parametrize(
    "input_type,input_data,expected_key",
    [
        (InputType.GIT_REPO, "https://github.com/acme/shop", "testableClasses"),
        (InputType.WEB_URL, "https://shop.example.com/login", "elements"),
        (InputType.POSTMAN_COLLECTION, '{"info": {"name": "Shop"}}', "endpoints"),
        (InputType.USER_STORY, "As a shopper I want a cart", "riskAreas"),
    ],
)
@pytest.mark.asyncio
async def test_analysis_fallback_per_input_type(input_type, input_data, expected_key):
    service = TestGenerationService(FailingAIService())
    analysis = await service.analyze(make_request(input_type=input_type, input_data=input_data))
    assert expected_key in analysis


@pytest.mark.asyncio
async def test_git_repository_fallback_yields_single_class_test():
    ai = FakeAIService(replies=[AIServiceError("analysis failed")])
    tests = await TestGenerationService(ai).generate_tests(
        make_request(input_type=InputType.GIT_REPO, input_data="https://github.com/acme/shop")
    )
    # One inferred class is below the per-class threshold
    assert len(tests) == 1
    assert tests[0].filename == "test-https-github-com.py"


@pytest.mark.asyncio
async def test_class_tests_fall_back_per_class():
    analysis = {
        "testableClasses": [
            {"className": "Cart", "methods": ["add"]},
            {"className": "Checkout", "methods": ["pay"]},
        ]
    }
    ai = FakeAIService(replies=[json.dumps(analysis), "class CartTest: pass", AIServiceError("boom")])
    tests = await TestGenerationService(ai).generate_tests(
        make_request(input_type=InputType.GIT_REPO, input_data="https://github.com/acme/shop")
    )

    assert [t.filename for t in tests] == ["CartTest.py", "CheckoutTest.py", "TestSuite.py"]
    assert [t.template_based for t in tests] == [False, True, False]


@pytest.mark.asyncio
async def test_class_names_given_as_strings():
    analysis = {"testableClasses": ["Cart", "Checkout"]}
    ai = FakeAIService(replies=[json.dumps(analysis), "class CartTest: pass", "class CheckoutTest: pass"])
    tests = await TestGenerationService(ai).generate_tests(
        make_request(
            input_type=InputType.GIT_REPO,
            input_data="https://github.com/acme/shop",
            test_types=[TestType.UNIT, TestType.BDD],
        )
    )

    assert [(t.type, t.filename) for t in tests[:3]] == [
        (TestType.UNIT, "CartTest.py"),
        (TestType.UNIT, "CheckoutTest.py"),
        (TestType.UNIT, "TestSuite.py"),
    ]
    assert tests[3].type == TestType.BDD
    assert "Class: Checkout" in ai.calls[2]["prompt"]


@pytest.mark.asyncio
async def test_unusable_class_entries_fall_back_to_single_unit_test():
    analysis = {"testableClasses": [1, None]}
    ai = FakeAIService(replies=[json.dumps(analysis)])
    tests = await TestGenerationService(ai).generate_tests(
        make_request(test_types=[TestType.UNIT, TestType.BDD])
    )

    assert [t.type for t in tests] == [TestType.UNIT, TestType.BDD]
    assert tests[0].filename == "test-shoppers-can-apply.py"
    assert not tests[0].template_based


@pytest.mark.asyncio
async def test_class_methods_given_as_objects():
    analysis = {
        "frameworks": [{"name": "Django"}],
        "testableClasses": [
            {"className": "Cart", "methods": ["add"]},
            {"className": "Checkout", "methods": [{"name": "pay"}], "dependencies": [{"name": "PaymentGateway"}]},
        ],
    }
    ai = FakeAIService(replies=[json.dumps(analysis), "class CartTest: pass", "class CheckoutTest: pass"])
    tests = await TestGenerationService(ai).generate_tests(make_request())

    assert [t.filename for t in tests] == ["CartTest.py", "CheckoutTest.py", "TestSuite.py"]
    assert tests[0].content == "class CartTest: pass"
    assert not any(t.template_based for t in tests)
    assert "Methods: pay" in ai.calls[2]["prompt"]
    assert "Dependencies: PaymentGateway" in ai.calls[2]["prompt"]
    assert "Framework: Django" in ai.calls[2]["prompt"]


@pytest.mark.asyncio
async def test_unexpected_class_error_only_replaces_that_class(monkeypatch):
    from autotest.services import prompt_builder

    build = prompt_builder.build_class_unit_prompt

    def build_or_fail(request, testable_class, analysis):
        if testable_class["className"] == "Checkout":
            raise TypeError("unsupported class shape")
        return build(request, testable_class, analysis)

    monkeypatch.setattr(prompt_builder, "build_class_unit_prompt", build_or_fail)
    analysis = {
        "testableClasses": [
            {"className": "Cart", "methods": ["add"]},
            {"className": "Checkout", "methods": [{"name": "pay"}]},
        ]
    }
    ai = FakeAIService(replies=[json.dumps(analysis), "class CartTest: pass"])
    tests = await TestGenerationService(ai).generate_tests(make_request())

    assert [t.filename for t in tests] == ["CartTest.py", "CheckoutTest.py", "TestSuite.py"]
    assert [t.template_based for t in tests] == [False, True, False]
    assert tests[0].content == "class CartTest: pass"
    assert "def test_pay" in tests[1].content


@pytest.mark.asyncio
async def test_failure_analysis():
    ai = FakeAIService(default="Root cause: stale selector")
    service = TestGenerationService(ai)
    assert await service.analyze_test_failure("NoSuchElement", TestType.UI) == "Root cause: stale selector"

    canned = await TestGenerationService(FailingAIService()).analyze_test_failure("Timeout", TestType.API)
    assert canned.startswith("# Test Failure Analysis")
    assert "Timeout" in canned


def test_failure_analysis_endpoint(test_client, auth, fake_ai):
    fake_ai.default = "Increase the wait timeout"
    response = test_client.post(
        "/api/ai/analyze",
        json={"logs": "TimeoutException after 10s", "testType": "ui", "testCode": "driver.find(...)"},
        headers=auth["headers"],
    )
    assert response.status_code == 200
    assert response.json() == {"analysis": "Increase the wait timeout", "message": "Test failure analyzed"}
    assert "driver.find" in fake_ai.calls[0]["prompt"]
