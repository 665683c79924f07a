from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

REPORT_COLUMNS = ["Date", "ServiceArea", "TenantId", "AppId", "AppName", "Usage"]


class ReportRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: Optional[str] = Field(None, alias="Date", description="Report date as sent by the feed")
    service_area: Optional[str] = Field(None, alias="ServiceArea", description="Product area that generated the usage")
    tenant_id: Optional[str] = Field(None, alias="TenantId", description="Directory tenant identifier")
    app_id: str = Field(..., alias="AppId", min_length=1, description="Application identifier")
    app_name: str = Field(..., alias="AppName", description="Resolved display name, AppId when unresolved")
    usage: int = Field(0, alias="Usage", ge=0, description="Request count")

    def to_row(self) -> dict:
        """Return the record keyed by the report column headers."""
        return self.model_dump(by_alias=True)


class ReportSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_records: int = Field(0, ge=0)
    distinct_apps: int = Field(0, ge=0)
    date_min: Optional[str] = None
    date_max: Optional[str] = None

    @property
    def date_range(self) -> str:
        if self.date_min is None or self.date_max is None:
            return "N/A"
        return f"{self.date_min} to {self.date_max}"


class Report(BaseModel):
    records: List[ReportRecord] = Field(default_factory=list)
    summary: ReportSummary = Field(default_factory=ReportSummary)
    skipped_rows: int = Field(0, ge=0, description="Rows dropped for lacking an AppId")
