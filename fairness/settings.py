"""Environment-driven configuration for the fairness pipeline."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_METHODOLOGY = PACKAGE_DIR / "scoring" / "methodology.yaml"
DEFAULT_COUNTRIES = PACKAGE_DIR / "ingestion" / "countries.csv"


@dataclass(slots=True)
class Settings:
    """Runtime settings loaded from environment variables."""

    data_dir: Path
    output_dir: Path
    methodology_path: Path
    countries_path: Path
    history_path: Path
    log_level: str

    @property
    def processed_dir(self) -> Path:
        return self.data_dir / "processed"

    @classmethod
    def load(cls) -> "Settings":
        """Load settings from environment variables with sensible defaults."""

        data_dir = Path(os.getenv("FAIRNESS_DATA_DIR", "data"))
        output_dir = Path(os.getenv("FAIRNESS_OUTPUT_DIR", "artifacts"))
        methodology_path = Path(
            os.getenv("FAIRNESS_METHODOLOGY", str(DEFAULT_METHODOLOGY))
        )
        countries_path = Path(os.getenv("FAIRNESS_COUNTRIES", str(DEFAULT_COUNTRIES)))
        history_path = Path(
            os.getenv("FAIRNESS_HISTORY", str(data_dir / "history.json"))
        )
        log_level = os.getenv("LOG_LEVEL", "INFO")
        return cls(
            data_dir=data_dir,
            output_dir=output_dir,
            methodology_path=methodology_path,
            countries_path=countries_path,
            history_path=history_path,
            log_level=log_level,
        )

    def ensure_directories(self) -> None:
        """Create directories required for the runtime to operate."""

        for path in {self.data_dir, self.output_dir}:
            if not path.exists():
                path.mkdir(parents=True, exist_ok=True)
