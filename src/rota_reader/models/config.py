"""Reader configuration: workbook conventions and calendar output defaults."""
from dataclasses import asdict, dataclass, fields
from typing import Dict

from .rules import REST_DAY_MARKER


@dataclass
class ReaderConfig:
    """Configuration for roster extraction and calendar export."""

    # Directory / anchor sheet
    directory_sheet: str = "Roster"
    directory_header_rows: int = 7  # Employee rows begin on row 8
    directory_max_blocks: int = 3  # Scanning stops after this many "total" rows
    anchor_row: int = 2
    anchor_column: int = 1

    # Extraction window
    default_weeks: int = 26
    max_weeks: int = 52

    # Cell conventions
    rest_day_marker: str = REST_DAY_MARKER

    # Calendar output
    product_id: str = "-//Rota Reader//EN"
    timezone_hint: str = "Europe/London"
    uid_domain: str = "rotareader.com"

    def __post_init__(self):
        if self.default_weeks < 1:
            self.default_weeks = 1
        if self.max_weeks < self.default_weeks:
            self.max_weeks = self.default_weeks
        if self.directory_max_blocks < 1:
            self.directory_max_blocks = 1

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict) -> "ReaderConfig":
        """Create from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in d.items() if k in known})


DEFAULT_CONFIG = ReaderConfig()
