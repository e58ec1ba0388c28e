from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum


class CamelModel(BaseModel):
    """Base for payloads exchanged with the dashboard in camelCase."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"
    VIEWER = "viewer"


class PlanName(str, Enum):
    FREE = "free"
    BASIC = "basic"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class InputType(str, Enum):
    USER_STORY = "user_story"
    CODE = "code"
    API_SPEC = "api_spec"
    GIT_REPO = "git_repo"
    POSTMAN_COLLECTION = "postman_collection"
    WEB_URL = "web_url"


class TestType(str, Enum):
    BDD = "bdd"
    UNIT = "unit"
    API = "api"
    UI = "ui"
    PERFORMANCE = "performance"


class Language(str, Enum):
    JAVA = "java"
    PYTHON = "python"
    JAVASCRIPT = "javascript"


class ExecutionStatus(str, Enum):
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class ArtifactCategory(str, Enum):
    MAIN = "main"
    STEP_DEFINITIONS = "step_definitions"
    UTILS = "utils"
    RUNNER = "runner"
    PAGE_OBJECTS = "page_objects"
    CONFIG = "config"


class MessageResponse(BaseModel):
    message: str


# --- Auth -----------------------------------------------------------------

class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, description="Login e-mail, unique per user")
    name: str = Field(..., min_length=1)
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: int
    email: str
    name: str
    role: str
    plan: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    token: str
    user: UserOut


class TokenUser(BaseModel):
    """Claims carried by an access token."""

    id: int
    email: str
    role: str
    plan: str


# --- Projects -------------------------------------------------------------

class ProjectCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = ""


class ProjectOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = ""
    user_id: int
    created_at: datetime
    updated_at: datetime
    test_count: int = 0
    test_types: List[str] = Field(default_factory=list)

    class Config:
        from_attributes = True


class ProjectListResponse(BaseModel):
    projects: List[ProjectOut]


class ProjectCreateResponse(BaseModel):
    project: ProjectOut
    message: str


# --- Test cases -----------------------------------------------------------

class TestCaseCreate(CamelModel):
    name: str = Field(..., min_length=1)
    type: TestType
    content: str = Field(..., min_length=1)
    project_id: Optional[int] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class TestCaseOut(BaseModel):
    id: int
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    name: str
    type: str
    content: str
    input_source: Optional[str] = None
    ai_model_used: Optional[str] = None
    created_by: int
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class TestCaseListResponse(CamelModel):
    test_cases: List[TestCaseOut]


class TestCaseCreateResponse(CamelModel):
    test_case: TestCaseOut
    message: str


# --- Generation -----------------------------------------------------------

class TestGenerationRequest(CamelModel):
    """Input of the generation pipeline."""

    input_type: InputType = InputType.USER_STORY
    input_data: str
    test_types: List[TestType]
    language: Language = Language.PYTHON
    additional_context: Optional[str] = None
    framework: Optional[str] = None
    testing_library: Optional[str] = None


class GenerateTestsRequest(CamelModel):
    """Body of POST /generate-tests; presence and size are checked by the service."""

    input_type: InputType = InputType.USER_STORY
    input_data: Optional[str] = None
    test_types: List[TestType] = Field(default_factory=list)
    language: Language = Language.PYTHON
    additional_context: Optional[str] = None
    framework: Optional[str] = None
    testing_library: Optional[str] = None
    project_id: Optional[int] = None

    def to_generation_request(self) -> TestGenerationRequest:
        return TestGenerationRequest(
            input_type=self.input_type,
            input_data=self.input_data or "",
            test_types=self.test_types,
            language=self.language,
            additional_context=self.additional_context,
            framework=self.framework,
            testing_library=self.testing_library,
        )


class GeneratedTest(CamelModel):
    type: TestType
    content: str
    filename: str
    description: str
    coverage: List[str] = Field(default_factory=list)
    dependencies: List[str] = Field(default_factory=list)
    category: ArtifactCategory = ArtifactCategory.MAIN
    # True when the content comes from a hardcoded template instead of the model
    template_based: bool = False


class SavedTest(GeneratedTest):
    id: int


class UsageInfo(BaseModel):
    current: int
    limit: int
    remaining: int


class GenerateTestsResponse(CamelModel):
    tests: List[SavedTest]
    message: str
    usage: UsageInfo
    fallback_used: bool = False
    notice: Optional[str] = None


class FailureAnalysisRequest(CamelModel):
    logs: str = Field(..., min_length=1)
    test_type: TestType
    test_code: Optional[str] = None


class FailureAnalysisResponse(BaseModel):
    analysis: str
    message: str


# --- Executions & analytics -----------------------------------------------

class ExecuteTestsRequest(CamelModel):
    test_case_ids: List[int] = Field(default_factory=list)
    environment: str = "development"


class ExecutionOut(BaseModel):
    id: int
    test_case_id: int
    status: ExecutionStatus
    duration: int
    environment: Optional[str] = None
    triggered_by: Optional[int] = None
    logs: Optional[str] = None
    created_at: Optional[datetime] = None
    test_name: Optional[str] = None
    test_type: Optional[str] = None
    project_name: Optional[str] = None


class ExecutionListResponse(BaseModel):
    executions: List[ExecutionOut]


class ExecuteTestsResponse(BaseModel):
    executions: List[ExecutionOut]
    message: str


class ResultsResponse(BaseModel):
    results: List[ExecutionOut]


class TrendPoint(BaseModel):
    date: str
    passed: int
    failed: int
    total: int


class TypeSlice(BaseModel):
    name: str
    value: int
    color: str


class EnvironmentStat(BaseModel):
    environment: Optional[str] = None
    total: int
    passed: int
    failed: int


class Analytics(CamelModel):
    total_executions: int
    pass_rate: float
    avg_duration: float
    trends_data: List[TrendPoint]
    type_distribution: List[TypeSlice]
    environment_stats: List[EnvironmentStat]


class AnalyticsResponse(BaseModel):
    analytics: Analytics


class DashboardStats(CamelModel):
    tests_generated: int
    tests_executed: int
    projects_count: int
    pass_rate: int
    monthly_quota: int
    quota_used: int


class ActivityItem(BaseModel):
    id: int
    type: str
    description: str
    timestamp: datetime
    status: str = "success"


class DashboardResponse(CamelModel):
    stats: DashboardStats
    recent_activity: List[ActivityItem]


# --- Reports --------------------------------------------------------------

class ReportCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = ""
    type: Optional[str] = None
    format: Optional[str] = None
    schedule: Optional[str] = None
    filters: Dict[str, Any] = Field(default_factory=dict)


class ReportOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = ""
    type: str
    format: str
    schedule: str
    filters: Dict[str, Any] = Field(default_factory=dict)
    created_by: int
    created_at: datetime
    last_generated: Optional[datetime] = None
    status: str

    class Config:
        from_attributes = True


class ReportListResponse(BaseModel):
    reports: List[ReportOut]


class ReportCreateResponse(BaseModel):
    report: ReportOut
    message: str


# --- Billing --------------------------------------------------------------

class PlanUsage(BaseModel):
    tests_generated: int
    tests_limit: int
    team_members: int
    team_limit: int
    storage_used: float
    storage_limit: int


class PaymentMethodOut(BaseModel):
    type: str
    last_four: Optional[str] = None
    expires: Optional[str] = None


class InvoiceOut(BaseModel):
    id: int
    date: datetime
    amount: float
    status: str
    download_url: Optional[str] = None


class BillingInfo(BaseModel):
    current_plan: str
    billing_cycle: str
    next_billing_date: Optional[datetime] = None
    amount: float
    usage: PlanUsage
    payment_method: Optional[PaymentMethodOut] = None
    invoices: List[InvoiceOut]


class BillingResponse(BaseModel):
    billing: BillingInfo


class UpgradeRequest(BaseModel):
    plan: Optional[str] = None


class UpgradeResponse(BaseModel):
    message: str
    plan: str
    amount: float
    checkout_url: Optional[str] = None


# --- Settings -------------------------------------------------------------

class SettingsPayload(BaseModel):
    profile: Optional[Dict[str, Any]] = None
    notifications: Optional[Dict[str, Any]] = None
    security: Optional[Dict[str, Any]] = None
    preferences: Optional[Dict[str, Any]] = None


class SettingsResponse(BaseModel):
    settings: SettingsPayload


class PasswordChangeRequest(CamelModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class TwoFactorSetupResponse(CamelModel):
    secret: str
    qr_code_url: str
    backup_codes: List[str]
    message: str


# --- Team -----------------------------------------------------------------

class TeamMemberOut(BaseModel):
    id: int
    name: str
    email: str
    user_role: str
    role: Optional[str] = None
    status: Optional[str] = None
    created_at: datetime
    last_login: Optional[datetime] = None
    projects_count: int = 0
    tests_generated: int = 0


class TeamResponse(BaseModel):
    members: List[TeamMemberOut]


class InviteRequest(BaseModel):
    email: Optional[str] = None
    role: Optional[UserRole] = None
    message: Optional[str] = None


class InvitedMember(BaseModel):
    id: int
    email: str
    role: str
    status: str


class InviteResponse(BaseModel):
    message: str
    member: InvitedMember


class RoleUpdateRequest(BaseModel):
    role: UserRole


# --- Uploads --------------------------------------------------------------

class SourceFileAnalysis(CamelModel):
    lines_of_code: int
    total_lines: int
    language: str
    complexity: str
    testable_elements: List[str] = Field(default_factory=list)


class UploadedFileOut(CamelModel):
    name: str
    size: int
    type: str
    path: str
    analysis: SourceFileAnalysis


class UploadResponse(CamelModel):
    success: bool = True
    files: List[UploadedFileOut]
    project_analysis: Dict[str, Any]
    total_files: int
    total_size: int
    # The accepted files as one ``// File:`` blob, ready for a ``code`` generation request
    input_data: str
    message: str
