"""Pipeline state models shared across all stages."""

from __future__ import annotations

from dataclasses import dataclass, field, fields


@dataclass
class AttachedDocument:
    name: str
    mime: str
    text_content: str       # plain text, already extracted and capped


@dataclass
class RequirementRecord:
    app_type: str | None = None             # one of config.keywords.APP_TYPES
    design: str | None = None               # minimal | modern | corporate
    features: set[str] = field(default_factory=set)
    stack: list[str] = field(default_factory=list)
    database: bool = False
    database_product: str | None = None     # "supabase", "mongodb", ...
    authentication: bool = False
    payment_provider: str | None = None     # "stripe", "paypal"
    target: str | None = None               # web | mobile | both
    documents: list[AttachedDocument] = field(default_factory=list)
    source_text: str = ""

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"RequirementRecord is frozen, cannot set '{name}'")
        object.__setattr__(self, name, value)

    @property
    def complexity(self) -> str:
        count = len(self.features)
        if count <= 2:
            return "simple"
        if count <= 5:
            return "medium"
        return "complex"

    @property
    def frozen(self) -> bool:
        return getattr(self, "_frozen", False)

    def freeze(self) -> RequirementRecord:
        """Lock the record once generation starts."""
        if not self.frozen:
            object.__setattr__(self, "features", frozenset(self.features))
            object.__setattr__(self, "stack", tuple(self.stack))
            object.__setattr__(self, "documents", tuple(self.documents))
            object.__setattr__(self, "_frozen", True)
        return self

    def thawed_copy(self) -> RequirementRecord:
        """Return an editable copy, whether or not this record is frozen."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values["features"] = set(values["features"])
        values["stack"] = list(values["stack"])
        values["documents"] = list(values["documents"])
        return RequirementRecord(**values)


@dataclass
class Intent:
    kind: str                   # create | modify | question
    confidence: float           # 0..1
    needs_clarification: bool = False
    questions: list[str] = field(default_factory=list)


@dataclass
class ClarificationDecision:
    needs_clarification: bool
    questions: list[str]        # zero or one composed message
    pending: list[str] = field(default_factory=list)
    suggested_defaults: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Role:
    id: str
    display_name: str
    domain_instructions: str
    priority: int


@dataclass
class ExecutionPlan:
    roles: list[Role]
    mode: str                   # parallel | sequential
    estimated_duration_seconds: int


@dataclass
class GenerationRequest:
    role_instructions: str
    user_request_summary: str
    context_fields: dict


@dataclass
class IssueReport:
    id: str
    severity: str               # critical | high | medium | low
    category: str               # structure, syntax, ui, logic, security, ...
    origin_role_id: str
    description: str
    suggested_fix: str | None
    auto_fixable: bool


@dataclass
class RoleResult:
    role_id: str
    output_text: str
    elapsed_ms: int
    succeeded: bool
    error_detail: str | None = None
    issues: list[IssueReport] = field(default_factory=list)
    session_id: str | None = None


@dataclass
class FileEntry:
    path: str           # relative path e.g. "src/App.jsx"
    content: str
    language: str       # "javascript", "html", "css", etc.


@dataclass
class SingleDocument:
    content: str

    kind = "single"


@dataclass
class MultiFileProject:
    name: str
    files: list[FileEntry]
    entry_file: str
    setup_notes: str
    salvaged: bool = False      # built by the salvage fallback, lower confidence

    kind = "multi"

    def __post_init__(self):
        if not self.files:
            raise ValueError("A multi-file project needs at least one file")


@dataclass
class PipelineResponse:
    kind: str                   # clarification | answer | artifact
    message: str
    requirements: RequirementRecord | None = None
    intent: Intent | None = None
    artifact: SingleDocument | MultiFileProject | None = None
    plan: ExecutionPlan | None = None
    role_results: list[RoleResult] = field(default_factory=list)
    suggested_defaults: dict = field(default_factory=dict)
    validation: ValidationReport | None = None


@dataclass
class DetectionResult:
    issues: list[IssueReport]
    needs_escalation: bool
    confidence: int             # 0..100, advisory only


@dataclass
class CollaborationMessage:
    id: str
    sender: str
    recipient: str              # a role id, "all" or "lead"
    kind: str                   # discussion | patch-proposal | validation | escalation
    content: str
    timestamp: float
    priority: str = "medium"
    issue: IssueReport | None = None
    before: str | None = None   # patch-proposal only
    after: str | None = None


@dataclass
class CollaborationSession:
    id: str
    participants: list[str]
    started_at: float
    messages: list[CollaborationMessage] = field(default_factory=list)
    resolved: bool = False
    ended_at: float | None = None
    final_decision: str | None = None


@dataclass
class ValidationReport:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
