"""Pydantic request/response models."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from baseline_checker import BaselineTier


# --- Request ---


class CheckRequest(BaseModel):
    """Request body for a single feature lookup."""

    token: str = Field(..., description="Feature id, CSS property, at-rule, API name or alias")
    target: Optional[BaselineTier] = Field(default=None, description="Minimum acceptable Baseline tier")


class AnalyzeRequest(BaseModel):
    """Unified request: code+filename, file_paths, or folder_path."""

    code: Optional[str] = Field(default=None, description="Source code to analyze")
    filename: Optional[str] = Field(
        default=None,
        description="Virtual filename; its extension (.css, .js, .tsx, ...) picks the extractor",
    )
    file_paths: Optional[List[str]] = Field(default=None, description="Absolute paths to source files on server")
    folder_path: Optional[str] = Field(default=None, description="Absolute path to a project folder on server")
    target: Optional[BaselineTier] = Field(default=None, description="Minimum acceptable Baseline tier")
    exceptions: Optional[List[str]] = Field(default=None, description="Feature tokens or ids that never fail")
    generate_fixes: bool = Field(default=False, description="Add progressive enhancements and AI fix suggestions")

    model_config = {"populate_by_name": True}


# --- Responses ---


class FeatureCheckOut(BaseModel):
    """Answer to a point query."""

    token: str
    feature_id: Optional[str] = Field(default=None, alias="featureId")
    baseline: Optional[str] = Field(default=None, description="widely-available, newly-available, limited or null")
    browsers: Dict[str, str] = Field(default_factory=dict)
    meets_criteria: bool = Field(..., alias="meetsCriteria")
    suggestion: Optional[str] = None

    model_config = {"populate_by_name": True}


class LocationOut(BaseModel):
    file: str
    line: int
    column: int


class UsageOut(BaseModel):
    """Single detected feature usage."""

    feature: str
    feature_id: str = Field(..., alias="featureId")
    location: LocationOut
    context: str
    baseline: Optional[str] = None
    severity: str = Field(..., description="error, warning or info")
    browsers: Dict[str, str] = Field(default_factory=dict)
    suggestion: Optional[str] = None
    polyfill: Optional[str] = None
    alternative: Optional[str] = None

    model_config = {"populate_by_name": True}


class SummaryOut(BaseModel):
    errors: int
    warnings: int
    suggestions: int
    compatibility_score: int = Field(..., alias="compatibilityScore")

    model_config = {"populate_by_name": True}


class OpportunityOut(BaseModel):
    category: str
    old_feature: str = Field(..., alias="oldFeature")
    new_feature: str = Field(..., alias="newFeature")
    baseline_status: str = Field(..., alias="baselineStatus")
    impact: str
    effort: str
    description: str
    example: Optional[str] = None

    model_config = {"populate_by_name": True}


class EnhancementOut(BaseModel):
    feature: str
    fallback: str
    enhancement: str
    example: str


class AnalyzeResponse(BaseModel):
    """Response for POST /analyze."""

    total_files: int = Field(..., alias="totalFiles", description="Files with at least one usage")
    files_scanned: int = Field(..., alias="filesScanned")
    total_features: int = Field(..., alias="totalFeatures")
    summary: SummaryOut
    violations: List[UsageOut] = Field(default_factory=list)
    warnings: List[UsageOut] = Field(default_factory=list)
    suggestions: List[UsageOut] = Field(default_factory=list)
    exempted: List[UsageOut] = Field(default_factory=list)
    modernization_opportunities: List[OpportunityOut] = Field(
        default_factory=list, alias="modernizationOpportunities"
    )
    progressive_enhancements: List[EnhancementOut] = Field(
        default_factory=list, alias="progressiveEnhancements"
    )
    ai_fix_suggestions: Optional[str] = Field(default=None, description="AI-generated fix suggestions")

    model_config = {"populate_by_name": True}


class ErrorDetail(BaseModel):
    """Error response detail."""

    detail: str = Field(..., description="Error message")
