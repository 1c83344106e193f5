import os, json, logging, traceback
import azure.functions as func

# Only load .env locally; the Functions host sets WEBSITE_SITE_NAME on Azure
IS_AZURE = bool(os.getenv("WEBSITE_SITE_NAME"))
if not IS_AZURE:
    from dotenv import load_dotenv
    load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

app = func.FunctionApp(http_auth_level=func.AuthLevel.ANONYMOUS)

REGISTERED: list[str] = []
FAILURES: dict[str, dict] = {}

def _try(modpath: str, name: str):
    try:
        mod = __import__(modpath, fromlist=["bp"])
        app.register_functions(getattr(mod, "bp"))
        REGISTERED.append(name)
    except Exception as e:
        logging.getLogger(__name__).exception("failed to register %s", name)
        FAILURES[name] = {"error": repr(e), "trace": traceback.format_exc()}

# Register at startup so the Functions host discovers the HTTP triggers
_try("routes.auth", "auth")
_try("routes.admins", "admins")
_try("routes.cars", "cars")
_try("routes.makes", "makes")
_try("routes.news", "news")
_try("routes.offers", "offers")
_try("routes.partners", "partners")
_try("routes.faqs", "faqs")
_try("routes.feedback", "feedback")
_try("routes.site_content", "site_content")
_try("routes.uploads", "uploads")

@app.function_name(name="Ping")
@app.route(route="ping", methods=["GET"])
def ping(req: func.HttpRequest) -> func.HttpResponse:
    return func.HttpResponse("ok", mimetype="text/plain")

# Diagnostics (read-only)
@app.function_name(name="Diag")
@app.route(route="_diag", methods=["GET"])
def diag(req: func.HttpRequest) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps({"registered": REGISTERED, "failures": FAILURES}),
        mimetype="application/json"
    )
