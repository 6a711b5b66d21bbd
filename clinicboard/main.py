import logging

from fastapi import FastAPI

from clinicboard.api.v1.appointments import router as appointments_router
from clinicboard.api.v1.auth import router as auth_router
from clinicboard.api.v1.calendar import router as calendar_router
from clinicboard.api.v1.calls import router as calls_router
from clinicboard.api.v1.dashboard import router as dashboard_router
from clinicboard.api.v1.patients import router as patients_router
from clinicboard.api.v1.reminders import router as reminders_router
from clinicboard.api.v1.working_hours import router as working_hours_router
from clinicboard.core.config import settings


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("resource", "status", "error", "practitioner_id", "date", "reason"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Clinic Board", version="0.1.0")

app.include_router(auth_router, prefix="/api/v1")
app.include_router(calendar_router, prefix="/api/v1")
app.include_router(appointments_router, prefix="/api/v1")
app.include_router(calls_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix="/api/v1")
app.include_router(working_hours_router, prefix="/api/v1")
app.include_router(reminders_router, prefix="/api/v1")
app.include_router(patients_router, prefix="/api/v1")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
