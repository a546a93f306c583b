import logging
import json
import os
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional


class AgentLogger:
    """Structured logger shared by the store, the generation client and the CLI.

    Every record is a JSON payload prefixed with its kind, written to
    `<log_dir>/<component>.log` and to the console.
    """

    def __init__(self, component: str, log_dir: Optional[str] = None):
        self.component = component
        self.log_dir = Path(log_dir or os.getenv("SOCIALPOST_LOG_DIR", "logs"))
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger(f"socialpost.{component}")
        self.logger.setLevel(logging.INFO)

        if not self.logger.handlers:
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )

            file_handler = logging.FileHandler(self.log_dir / f"{component}.log", encoding="utf-8")
            file_handler.setLevel(logging.INFO)
            file_handler.setFormatter(formatter)

            # Console only shows problems; the CLI prints its own progress
            console_handler = logging.StreamHandler()
            console_handler.setLevel(logging.WARNING)
            console_handler.setFormatter(formatter)

            self.logger.addHandler(file_handler)
            self.logger.addHandler(console_handler)

    def _payload(self, **fields: Any) -> str:
        record = {"timestamp": datetime.now().isoformat(), "component": self.component}
        record.update(fields)
        return json.dumps(record, ensure_ascii=False, default=str)

    def log_decision(self, decision_type: str, context: Dict[str, Any], outcome: str):
        """Log a branch taken by the façade (truncation, shortfall, rejection)"""
        self.logger.info("DECISION: " + self._payload(
            decision_type=decision_type, context=context, outcome=outcome
        ))

    def log_api_call(self, service: str, endpoint: str, success: bool, duration: float):
        """Log calls to the generation service"""
        level = logging.INFO if success else logging.ERROR
        self.logger.log(level, "API_CALL: " + self._payload(
            service=service, endpoint=endpoint, success=success,
            duration_seconds=round(duration, 3)
        ))

    def log_error(self, error_type: str, error_message: str, context: Dict[str, Any] = None):
        self.logger.error("ERROR: " + self._payload(
            error_type=error_type, error_message=error_message, context=context or {}
        ))

    def log_warning(self, message: str, context: Dict[str, Any] = None):
        self.logger.warning("WARNING: " + self._payload(message=message, context=context or {}))

    def log_info(self, message: str, context: Dict[str, Any] = None):
        self.logger.info("INFO: " + self._payload(message=message, context=context or {}))
