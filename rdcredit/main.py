from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging, os, time

from rdcredit import __version__
from rdcredit.calc_api import ACTIVE_REGIME, setup_calc_routes
from rdcredit.errors import ConfigurationError, ValidationError

log = logging.getLogger("uvicorn.error")

app = FastAPI(title="R&D Tax Credit Calculation Engine", version=__version__)

# CORS
# Example in .env:
# CORS_ALLOW_ORIGINS=https://app.example.com,https://admin.example.com
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

setup_calc_routes(app)


# -------------------------
# Error mapping
# -------------------------
@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    log.warning("Rejected calculation input on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"detail": "Invalid calculation input", "errors": list(exc.errors)},
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    log.error("Configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# -------------------------
# Health
# -------------------------
@app.get("/health")
def health():
    return {
        "status": "ok",
        "time": time.time(),
        "law_regime": ACTIVE_REGIME.regime_id,
        "ruleset_version": ACTIVE_REGIME.ruleset_version,
    }
