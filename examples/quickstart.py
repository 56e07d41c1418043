import sys
from pathlib import Path
import datetime as dt

# Add src to PYTHONPATH for local runs
sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from zoho_crm_client import ZohoCRMClient, ZohoCRMConfig  # type: ignore
from zoho_crm_client.core.errors import NoDataError, VendorError  # type: ignore

token = input("Enter a Zoho CRM auth token: ").strip()
if not token:
    print("No token entered; exiting.")
    sys.exit(1)

module = input("Module [default Leads]: ").strip() or "Leads"

config = ZohoCRMConfig(enable_logging=True, log_level="DEBUG")

# --------------------------- Helpers ---------------------------

def log(call: str):
    print({"call": call})


with ZohoCRMClient(config, default_params={"authtoken": token, "scope": "crmapi"}) as client:
    log(f"{module}.getFields")
    try:
        fields = client.call(module, "getFields")
    except VendorError as e:
        print({"error": e.to_dict()})
        sys.exit(1)
    required = [f.name for f in fields if f.required]
    print({"fields": len(fields), "required": required})

    log(f"{module}.insertRecords")
    rows = [
        {"Company": "Contoso", "Last Name": "Doe", "Lead Source": "Web"},
        {"Company": "Fabrikam", "Last Name": "Roe", "Last Activity Time": dt.datetime.now()},
        {"Company": "Missing last name"},
    ]
    results = client.call(module, "insertRecords", {"xmlData": rows, "version": 4})
    created = []
    for no, result in results.items():
        if result.is_success:
            created.append(result.id)
            print({"row": no, "id": result.id, "created": result.created_time})
        else:
            print({"row": no, "error": result.error.code, "details": result.error.message})

    log(f"{module}.getRecords")
    try:
        records = client.call(module, "getRecords", {"fromIndex": 1, "toIndex": 5})
    except NoDataError:
        records = {}
    for no, record in records.items():
        print({"row": no, "company": record.get("Company")})

    for record_id in created:
        log(f"{module}.deleteRecords {record_id}")
        print(client.call(module, "deleteRecords", {"id": record_id}))
