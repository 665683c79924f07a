import csv
import io
import re

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse, Response

from mock_data import (
    MOCK_APPLICATIONS,
    MOCK_SERVICE_PRINCIPALS,
    USAGE_COLUMNS,
    generate_mock_usage_rows,
)

app = FastAPI(
    title="App Usage Mock Graph API",
    description="Mock Graph endpoints serving the usage report and directory lookups",
    version="1.0.0"
)

PERIOD_PATTERN = re.compile(r"period='D(\d+)'")
APP_ID_FILTER_PATTERN = re.compile(r"^appId eq '((?:[^']|'')*)'$")


def _directory_response(names: dict, odata_filter: str | None):
    if odata_filter is None:
        return JSONResponse(status_code=400, content={"error": {"message": "$filter is required"}})

    match = APP_ID_FILTER_PATTERN.match(odata_filter.strip())
    if not match:
        return JSONResponse(status_code=400, content={"error": {"message": f"Unsupported filter: {odata_filter}"}})

    app_id = match.group(1).replace("''", "'")
    value = []
    if app_id in names:
        value.append({"appId": app_id, "displayName": names[app_id]})
    return {"value": value}


@app.get("/")
def root():
    return {
        "message": "App Usage Mock Graph API",
        "version": "1.0.0",
        "endpoints": {
            "usage_report": "/beta/reports/getApiUsageReport(period='D30')",
            "applications": "/beta/applications",
            "service_principals": "/beta/servicePrincipals"
        }
    }


@app.get("/{api_version}/reports/{report_function}")
def get_usage_report(api_version: str, report_function: str):
    match = PERIOD_PATTERN.search(report_function)
    if not match:
        return JSONResponse(
            status_code=400,
            content={"error": {"message": f"Missing period in {report_function}"}}
        )

    rows = generate_mock_usage_rows(days=int(match.group(1)))
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=USAGE_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)

    return Response(content="\ufeff" + buffer.getvalue(), media_type="text/csv")


@app.get("/{api_version}/applications")
def get_applications(api_version: str, odata_filter: str | None = Query(None, alias="$filter")):
    return _directory_response(MOCK_APPLICATIONS, odata_filter)


@app.get("/{api_version}/servicePrincipals")
def get_service_principals(api_version: str, odata_filter: str | None = Query(None, alias="$filter")):
    return _directory_response(MOCK_SERVICE_PRINCIPALS, odata_filter)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
