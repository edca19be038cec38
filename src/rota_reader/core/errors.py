"""
Error Taxonomy
==============
Client-input errors carry a 400 status and diagnostic fields that are safe to
return to the caller. Anything else reaching the service boundary is reported
as a generic 500.
"""
from typing import Any, Dict, List, Optional


class RotaReaderError(Exception):
    """Base exception for roster extraction and export failures."""

    status_code = 500

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = {k: v for k, v in details.items() if v is not None}

    def to_payload(self) -> Dict[str, Any]:
        """Error body returned to the caller."""
        return {"error": self.message, **self.details}


class ClientInputError(RotaReaderError):
    """Raised when the request or the uploaded workbook cannot be used."""

    status_code = 400


class UploadNotFoundError(ClientInputError):
    """No workbook is registered under the given token."""

    def __init__(self, token: Optional[str] = None):
        super().__init__("No uploaded Excel file found", token=token)


class SheetNotFoundError(ClientInputError):
    """No worker sheet matches the requested link."""

    def __init__(self, link: str, available_sheets: List[str]):
        super().__init__(
            f'No sheet matching "{link}" found',
            receivedLink=link,
            availableSheets=list(available_sheets),
        )


class DirectorySheetNotFoundError(ClientInputError):
    """The directory/anchor sheet is missing from the workbook."""

    def __init__(self, sheet_name: str, available_sheets: List[str]):
        super().__init__(
            f'Sheet "{sheet_name}" not found in the workbook',
            availableSheets=list(available_sheets),
        )


class WeekCommencingNotFoundError(ClientInputError):
    """The anchor cell holds no recognizable week-commencing date."""

    def __init__(self, sheet_name: str):
        super().__init__(
            f"Could not find first week commencing date in {sheet_name} sheet"
        )


class NoWeekRowsError(ClientInputError):
    """The worker sheet has no rows with a numeric week label."""

    def __init__(self, sheet_name: str):
        super().__init__("No valid week rows found", sheet=sheet_name)


class DateRangeError(ClientInputError):
    """The requested range ends before the roster starts."""

    def __init__(self, roster_start_date: str):
        super().__init__(
            "Selected dates fall before the roster weeks start",
            rosterStartDate=roster_start_date,
        )


class RequestValidationError(ClientInputError):
    """The request body failed validation."""

    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__("Invalid request", details=errors)
