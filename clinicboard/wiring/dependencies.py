from functools import lru_cache
import logging

from clinicboard.core.config import settings
from clinicboard.application.ports.clinic_api import ClinicApiPort
from clinicboard.application.ports.session_storage import SessionStoragePort
from clinicboard.application.use_cases.appointment_list import AppointmentListUseCase
from clinicboard.application.use_cases.auth_session import SessionManager
from clinicboard.application.use_cases.booking import BookingUseCase
from clinicboard.application.use_cases.call_history import CallHistoryUseCase
from clinicboard.application.use_cases.dashboard import DashboardUseCase
from clinicboard.application.use_cases.patients import PatientsUseCase
from clinicboard.application.use_cases.reminders import RemindersUseCase
from clinicboard.application.use_cases.slots import AvailabilityUseCase
from clinicboard.application.use_cases.working_hours import WorkingHoursUseCase
from clinicboard.application.utils.fetch_guard import FetchGuard
from clinicboard.infrastructure.clinic_api.http_client import HttpClinicApi
from clinicboard.infrastructure.clinic_api.mock_api import InMemoryClinicApi
from clinicboard.infrastructure.store.json_storage import JsonSessionStorage
from clinicboard.infrastructure.store.memory_storage import MemorySessionStorage


@lru_cache
def get_session_storage() -> SessionStoragePort:
    if settings.SESSION_STORE_PATH:
        return JsonSessionStorage(settings.SESSION_STORE_PATH)
    return MemorySessionStorage()


@lru_cache
def get_session_manager() -> SessionManager:
    # One manager per process: the signed-in user is shared by every request.
    manager = SessionManager(
        storage=get_session_storage(),
        demo_email=settings.DEMO_EMAIL,
        demo_password=settings.DEMO_PASSWORD,
    )
    manager.init()
    return manager


@lru_cache
def get_clinic_api() -> ClinicApiPort:
    logger = logging.getLogger(__name__)
    if settings.USE_MOCK_API:
        logger.info("Using InMemoryClinicApi (USE_MOCK_API=true)")
        return InMemoryClinicApi(seed_demo_data=True)

    logger.info("Using HttpClinicApi at %s", settings.CLINIC_API_BASE_URL)
    return HttpClinicApi(auth_headers=get_session_manager().auth_headers)


@lru_cache
def get_fetch_guard() -> FetchGuard:
    return FetchGuard()


def get_availability_use_case() -> AvailabilityUseCase:
    return AvailabilityUseCase(api=get_clinic_api(), guard=get_fetch_guard())


def get_booking_use_case() -> BookingUseCase:
    return BookingUseCase(
        api=get_clinic_api(),
        default_duration_minutes=settings.DEFAULT_APPOINTMENT_DURATION_MINUTES,
    )


def get_appointment_list_use_case() -> AppointmentListUseCase:
    return AppointmentListUseCase(api=get_clinic_api())


def get_call_history_use_case() -> CallHistoryUseCase:
    return CallHistoryUseCase(api=get_clinic_api())


def get_dashboard_use_case() -> DashboardUseCase:
    return DashboardUseCase(api=get_clinic_api())


def get_working_hours_use_case() -> WorkingHoursUseCase:
    return WorkingHoursUseCase(api=get_clinic_api())


def get_reminders_use_case() -> RemindersUseCase:
    return RemindersUseCase(api=get_clinic_api())


def get_patients_use_case() -> PatientsUseCase:
    return PatientsUseCase(api=get_clinic_api())
