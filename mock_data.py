import random
from datetime import date, timedelta

MOCK_APPLICATIONS = {
    "7f3c2a10-0000-4000-8000-000000000001": "Contoso Expense Portal",
    "7f3c2a10-0000-4000-8000-000000000002": "HR Onboarding Bot",
    "7f3c2a10-0000-4000-8000-000000000003": "Sales Forecast Sync",
}

MOCK_SERVICE_PRINCIPALS = {
    "00000003-0000-0000-c000-000000000000": "Microsoft Graph",
    "7f3c2a10-0000-4000-8000-000000000004": "Backup Agent",
}

SERVICE_AREAS = ["Users", "Groups", "Mail", "Files", "Teams"]
TENANT_ID = "5b1e9d3c-0000-4000-8000-00000000abcd"

USAGE_COLUMNS = ["Report Date", "Service Area", "Tenant ID", "App ID", "Request Count"]


def generate_mock_usage_rows(days: int = 30, seed: int = 7) -> list[dict]:
    """Deterministic usage rows keyed by the spaced CSV headers."""
    rng = random.Random(seed)
    app_ids = list(MOCK_APPLICATIONS) + list(MOCK_SERVICE_PRINCIPALS) + [
        "7f3c2a10-0000-4000-8000-0000000000ff"
    ]
    end = date(2025, 8, 31)
    rows = []

    for offset in range(days):
        report_date = (end - timedelta(days=offset)).isoformat()
        for app_id in rng.sample(app_ids, 3):
            rows.append({
                "Report Date": report_date,
                "Service Area": rng.choice(SERVICE_AREAS),
                "Tenant ID": TENANT_ID,
                "App ID": app_id,
                "Request Count": str(rng.randint(0, 5000)),
            })

    rows.sort(key=lambda row: row["Report Date"])
    return rows
