import logging
import threading

from fastapi import FastAPI, HTTPException, Query
from typing import List, Dict, Any
from pydantic import BaseModel
from dotenv import load_dotenv

# Load env first so Settings sees RATES_* overrides
load_dotenv(".env", override=False)

from .settings import Settings
from .communication.event_bus import event_bus
from .currency import convert, get_rate_provider, parse_currency
from .dashboard import CurrencyDisplay, CurrencyPreference
from .errors import InvalidConversionInput, RateServiceUnavailable
from .utils.logger import setup_logger

settings = Settings.from_env()

setup_logger(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Poster Dashboard", version="0.1.0")

rate_provider = get_rate_provider(
    settings.rates_provider,
    cache_ttl=settings.rates_cache_ttl,
    **settings.provider_kwargs(),
)

# Single-user dashboard: one preference, shared by every mounted display
preference = CurrencyPreference(event_bus, rate_provider, settings.default_currency)
displays: Dict[str, CurrencyDisplay] = {}

# Routes that touch the bus run in the threadpool so a slow rate lookup never
# stalls the event loop; this lock keeps them to one thread of control.
_dashboard_lock = threading.Lock()


@app.get("/")
async def root():
    return {"message": "Poster dashboard API is running. Try GET /api/currency/rates."}


# ---------------------------------------------------------------------------
# Currency conversion
# ---------------------------------------------------------------------------


@app.get("/api/currency/convert")
def convert_currency(
    amount: str = "0",
    source: str = Query("GBP", alias="from"),
    target: str = Query("GBP", alias="to"),
):
    try:
        value = float(amount)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid amount parameter")

    try:
        conversion = convert(value, source, target, preference.rate_provider)
    except InvalidConversionInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except RateServiceUnavailable as exc:
        logger.error("[convert] %s %s->%s failed: %s", amount, source, target, exc)
        raise HTTPException(status_code=503, detail="Exchange rate service unavailable")

    logger.debug("[convert] %s", conversion)
    return conversion.to_dict()


@app.get("/api/currency/rates")
def exchange_rates():
    try:
        table = preference.rate_provider.get_rates()
    except RateServiceUnavailable as exc:
        logger.error("[rates] %s", exc)
        raise HTTPException(status_code=503, detail="Exchange rate service unavailable")
    return {src.value: {dst.value: rate for dst, rate in row.items()} for src, row in table.items()}


# ---------------------------------------------------------------------------
# Display currency preference
# ---------------------------------------------------------------------------


class PreferencePatch(BaseModel):
    currency: str


@app.get("/api/currency/preference")
def get_preference():
    with _dashboard_lock:
        return preference.to_dict()


@app.patch("/api/currency/preference")
def patch_preference(p: PreferencePatch):
    try:
        currency = parse_currency(p.currency)
    except InvalidConversionInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    notified = True
    with _dashboard_lock:
        try:
            changed = preference.set_currency(currency)
        except Exception:
            # the preference is already switched; only some regions missed the event
            logger.exception("[preference] currency_changed handler failed")
            changed, notified = True, False
        body = {**preference.to_dict(), "changed": changed, "notified": notified}
    logger.info("[preference] currency=%s changed=%s notified=%s", body["currency"], changed, notified)
    return body


# ---------------------------------------------------------------------------
# Dashboard display regions
# ---------------------------------------------------------------------------


class DisplayCreate(BaseModel):
    name: str
    amount: float
    source_currency: str = "GBP"


@app.get("/api/displays")
def list_displays() -> List[Dict[str, Any]]:
    with _dashboard_lock:
        return [d.render() for d in displays.values()]


@app.post("/api/displays")
def mount_display(d: DisplayCreate):
    try:
        display = CurrencyDisplay(d.name, d.amount, preference, event_bus, source_currency=d.source_currency)
    except InvalidConversionInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    with _dashboard_lock:
        old = displays.pop(d.name, None)
        if old is not None:
            old.close()
        displays[d.name] = display.mount()
        return display.render()


@app.delete("/api/displays/{name}")
def unmount_display(name: str):
    with _dashboard_lock:
        display = displays.pop(name, None)
        if display is None:
            raise HTTPException(status_code=404, detail=f"Unknown display: {name}")
        display.close()
    return {"deleted": name}
