import random
from typing import List, Optional, Tuple

import structlog

from autotest.core.exceptions import NotFoundError, ValidationError
from autotest.models.schemas import ExecuteTestsRequest, ExecutionOut, ExecutionStatus
from autotest.repositories.interfaces.execution_repository import IExecutionRepository
from autotest.repositories.interfaces.test_case_repository import ITestCaseRepository

logger = structlog.get_logger()

PASSED_LOGS = "Test executed successfully\nAll assertions passed\nExecution completed"
FAILED_LOGS = "Test failed\nAssertion error: Expected value did not match\nExecution failed"


class ExecutionSimulator:
    """Stand-in for a real test runner: 80% of runs pass, each takes 1-6 seconds."""

    pass_rate = 0.8
    min_duration_ms = 1000
    max_duration_ms = 6000

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def run(self) -> Tuple[ExecutionStatus, int, str]:
        duration = self.rng.randint(self.min_duration_ms, self.max_duration_ms)
        if self.rng.random() < self.pass_rate:
            return ExecutionStatus.PASSED, duration, PASSED_LOGS
        return ExecutionStatus.FAILED, duration, FAILED_LOGS


class ExecutionService:
    def __init__(
        self,
        execution_repository: IExecutionRepository,
        test_case_repository: ITestCaseRepository,
        simulator: Optional[ExecutionSimulator] = None,
    ):
        self.execution_repository = execution_repository
        self.test_case_repository = test_case_repository
        self.simulator = simulator or ExecutionSimulator()

    async def list_executions(self, user_id: int) -> List[ExecutionOut]:
        return await self.execution_repository.list_for_user(user_id)

    async def execute_tests(self, user_id: int, request: ExecuteTestsRequest) -> List[ExecutionOut]:
        if not request.test_case_ids:
            raise ValidationError("Test case IDs are required")

        # An unknown id must leave no partial runs behind
        for test_case_id in request.test_case_ids:
            if not await self.test_case_repository.get_for_user(test_case_id, user_id):
                raise NotFoundError("Test case", test_case_id)

        executions = []
        for test_case_id in request.test_case_ids:
            status, duration, logs = self.simulator.run()
            executions.append(
                await self.execution_repository.create(
                    test_case_id=test_case_id,
                    status=status.value,
                    duration=duration,
                    environment=request.environment,
                    triggered_by=user_id,
                    logs=logs,
                )
            )

        logger.info(
            "Executed tests",
            user_id=user_id,
            count=len(executions),
            passed=sum(1 for e in executions if e.status == ExecutionStatus.PASSED),
            environment=request.environment,
        )
        return executions
