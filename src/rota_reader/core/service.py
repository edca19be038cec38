"""
Roster Service
==============
Request-level operations an HTTP layer dispatches to: register an upload,
select an employee, download a calendar. Every call names the upload token
it works on and returns a ServiceResponse; client mistakes map to 400 with
diagnostics, anything unexpected to a generic 500.
"""
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from pydantic import ValidationError

from rota_reader.core.dto import ServiceResponse
from rota_reader.core.errors import ClientInputError, RequestValidationError
from rota_reader.engine.extract import extract_shifts, get_employee_shift_data, load_directory
from rota_reader.engine.filters import filter_shifts, flatten_weeks
from rota_reader.io.ics_export import export_shifts_to_ics
from rota_reader.io.workbook import RosterWorkbook, open_workbook
from rota_reader.models.config import DEFAULT_CONFIG, ReaderConfig
from rota_reader.models.settings import ExportType
from rota_reader.models.validated import DownloadRequestModel, EmployeeSelectionModel
from rota_reader.state.uploads import UploadRegistry
from rota_reader.utils.structured_logging import bind_context, clear_context, get_structured_logger

log = get_structured_logger("rota_reader.service")

INTERNAL_ERROR = {"error": "Internal server error"}


class RosterService:
    """Stateless request handlers over a shared upload registry."""

    def __init__(
        self,
        registry: Optional[UploadRegistry] = None,
        config: ReaderConfig = DEFAULT_CONFIG,
        workbook_loader: Callable[[Path], RosterWorkbook] = open_workbook,
    ):
        self.registry = registry if registry is not None else UploadRegistry()
        self.config = config
        self._load = workbook_loader

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def upload(self, path: Union[str, Path]) -> ServiceResponse:
        """Parse the directory of a freshly uploaded workbook and register it."""
        def run():
            workbook = self._load(Path(path))
            links = load_directory(workbook, self.config)
            token = self.registry.register(path)
            log.info("upload_registered", links=len(links), token=token[:8])
            return ServiceResponse(200, payload={
                "success": True,
                "links": [link.to_dict() for link in links],
                "token": token,
            })
        return self._handle("upload", None, run)

    def select_employee(self, token: Optional[str], body: Dict[str, Any]) -> ServiceResponse:
        """Extract the selected employee's weeks as JSON."""
        def run():
            selection = EmployeeSelectionModel.model_validate(body)
            workbook = self._workbook(token)
            result = get_employee_shift_data(
                workbook,
                selection.name,
                selection.link,
                selection.wk,
                selection.start_date,
                selection.end_date,
                self.config,
            )
            log.info("employee_selected", link=selection.link, wk=selection.wk, weeks=len(result.weeks_data))
            return ServiceResponse(200, payload=result.to_dict())
        return self._handle("select_employee", token, run)

    def download_shifts(self, token: Optional[str], body: Dict[str, Any]) -> ServiceResponse:
        """Build an .ics download for all shifts, one month, or a single shift."""
        def run():
            request = DownloadRequestModel.model_validate(body)
            employee = request.employee_data
            month_filter = request.month_filter.to_dataclass() if request.month_filter else None

            if request.type == ExportType.SINGLE:
                shifts = [request.shift.to_dataclass()]
            else:
                workbook = self._workbook(token)
                parsed = extract_shifts(
                    workbook,
                    employee.link,
                    employee.wk,
                    employee.start_date,
                    employee.end_date,
                    self.config,
                )
                shifts = filter_shifts(flatten_weeks(parsed.weeks), request.type, month_filter)

            export = export_shifts_to_ics(
                shifts,
                employee.name,
                include_rest_days=request.include_rest_days,
                settings=request.event_settings(),
                export_type=request.type,
                month_filter=month_filter,
                config=self.config,
            )
            log.info("calendar_built", type=request.type.value, events=export.event_count, filename=export.filename)
            return ServiceResponse(200, body=export.content, headers=export.headers)
        return self._handle("download_shifts", token, run)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _workbook(self, token: Optional[str]) -> RosterWorkbook:
        return self._load(self.registry.path_for(token))

    def _handle(self, operation: str, token: Optional[str], run: Callable[[], ServiceResponse]) -> ServiceResponse:
        bind_context(operation=operation, token=(token or "")[:8])
        try:
            return run()
        except ValidationError as exc:
            error = RequestValidationError([
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()
            ])
            log.warning("request_invalid", errors=len(error.details["details"]))
            return ServiceResponse(error.status_code, payload=error.to_payload())
        except ClientInputError as exc:
            log.warning("request_rejected", error=exc.message, kind=type(exc).__name__)
            return ServiceResponse(exc.status_code, payload=exc.to_payload())
        except Exception:
            log.exception("request_failed")
            return ServiceResponse(500, payload=dict(INTERNAL_ERROR))
        finally:
            clear_context()
