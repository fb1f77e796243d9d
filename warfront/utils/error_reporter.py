"""Error collection for the turn orchestrator.

The reporter is an explicit object owned by whoever drives turns. It keeps a
bounded history of classified errors and answers whether play can continue.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

logger = logging.getLogger(__name__)

ERROR_CATEGORIES = ("validation", "runtime", "user_input", "system", "game_logic")
SEVERITIES = ("low", "medium", "high", "critical")
MAX_ERROR_HISTORY = 100

_LOG_LEVELS = {
    "low": logging.WARNING,
    "medium": logging.WARNING,
    "high": logging.ERROR,
    "critical": logging.CRITICAL,
}


@dataclass
class GameError:
    """A single recorded error.

    Attributes:
        category: One of ERROR_CATEGORIES
        severity: One of SEVERITIES
        message: Human-readable description
        context: Optional structured details
        timestamp: When the error was recorded
        recoverable: Whether play can continue after this error
    """

    category: str
    severity: str
    message: str
    context: dict[str, Any] | None = None
    timestamp: datetime = field(default_factory=datetime.now)
    recoverable: bool = True

    def __post_init__(self):
        """Validate error classification."""
        if self.category not in ERROR_CATEGORIES:
            raise ValueError(f"Invalid category: {self.category}")
        if self.severity not in SEVERITIES:
            raise ValueError(f"Invalid severity: {self.severity}")


@dataclass
class ErrorResponse:
    """How the caller should react to a reported error."""

    can_continue: bool
    user_message: str
    should_restart: bool


def is_recoverable(category: str, severity: str) -> bool:
    """Decide whether a category/severity combination is recoverable."""
    if severity == "critical":
        return False
    if category in ("validation", "game_logic"):
        # High validation or logic errors indicate corrupted state
        return severity != "high"
    if category == "runtime":
        return severity in ("low", "medium")
    if category == "user_input":
        return True
    if category == "system":
        return severity == "low"
    return False


class ErrorReporter:
    """Bounded, classified error history.

    Replaces a process-wide static log: create one per session and pass it to
    the components that report errors.
    """

    def __init__(self, max_history: int = MAX_ERROR_HISTORY):
        self.max_history = max_history
        self._errors: deque[GameError] = deque(maxlen=max_history)

    def report(
        self,
        category: str,
        severity: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> ErrorResponse:
        """Record an error and decide how the caller should react.

        Args:
            category: Error category
            severity: Error severity
            message: Description of what went wrong
            context: Optional structured details

        Returns:
            ErrorResponse describing whether play can continue
        """
        error = GameError(
            category=category,
            severity=severity,
            message=message,
            context=context,
            recoverable=is_recoverable(category, severity),
        )
        self._errors.append(error)
        logger.log(_LOG_LEVELS[severity], "[%s] %s: %s", severity.upper(), category, message)

        if severity == "critical":
            return ErrorResponse(
                can_continue=False,
                user_message=f"Critical error: {message}. The game must restart.",
                should_restart=True,
            )
        if severity == "high":
            suffix = "Attempting to continue..." if error.recoverable else "Game may be unstable."
            return ErrorResponse(
                can_continue=error.recoverable,
                user_message=f"Serious error: {message}. {suffix}",
                should_restart=not error.recoverable,
            )
        if severity == "medium":
            return ErrorResponse(
                can_continue=True,
                user_message=f"Error: {message}. Game will continue.",
                should_restart=False,
            )
        return ErrorResponse(can_continue=True, user_message=f"Warning: {message}", should_restart=False)

    def report_state_errors(self, validation_errors: list[str]) -> ErrorResponse:
        """Classify a batch of game state validation errors by their wording."""
        if not validation_errors:
            return ErrorResponse(can_continue=True, user_message="", should_restart=False)

        critical_markers = ("negative", "null", "missing")
        high_markers = ("inconsistent", "invalid state", "corrupted")
        critical = [e for e in validation_errors if any(m in e for m in critical_markers)]
        high = [e for e in validation_errors if any(m in e for m in high_markers)]
        context = {"all_errors": list(validation_errors)}

        if critical:
            return self.report(
                "validation",
                "critical",
                f"Game state validation failed: {', '.join(critical)}",
                context,
            )
        if high:
            return self.report(
                "validation",
                "high",
                f"Game state issues detected: {', '.join(high)}",
                context,
            )
        return self.report(
            "validation",
            "medium",
            f"Minor game state issues: {', '.join(validation_errors)}",
            context,
        )

    def report_turn_errors(self, turn_errors: list[str]) -> ErrorResponse:
        """Classify errors raised while processing a turn."""
        if not turn_errors:
            return ErrorResponse(can_continue=True, user_message="", should_restart=False)

        critical_markers = ("failed to process", "engine failure", "system crash")
        severity = "medium"
        if any(m in e for e in turn_errors for m in critical_markers):
            severity = "critical"
        prefix = "Turn processing failed" if severity == "critical" else "Turn processing issues"
        return self.report(
            "game_logic",
            severity,
            f"{prefix}: {', '.join(turn_errors)}",
            {"turn_errors": list(turn_errors)},
        )

    def report_user_input_error(self, message: str) -> ErrorResponse:
        """Record a rejected player command."""
        return self.report("user_input", "low", message)

    def report_system_error(self, error: Exception) -> ErrorResponse:
        """Classify an exception raised by the surrounding system."""
        text = str(error)
        context = {"error": repr(error)}
        if "memory" in text or isinstance(error, MemoryError):
            return self.report("system", "critical", f"Memory error: {text}", context)
        if "file" in text or isinstance(error, OSError):
            return self.report("system", "high", f"File system error: {text}", context)
        if "network" in text or "connection" in text:
            return self.report("system", "medium", f"Network error: {text}", context)
        return self.report("system", "high", f"System error: {text}", context)

    def recent(self, count: int = 10) -> list[GameError]:
        """Return the most recent errors, oldest first."""
        if count <= 0:
            return []
        return list(self._errors)[-count:]

    def statistics(self) -> dict[str, Any]:
        """Count errors by category and severity."""
        by_category = {c: 0 for c in ERROR_CATEGORIES}
        by_severity = {s: 0 for s in SEVERITIES}
        one_hour_ago = datetime.now() - timedelta(hours=1)
        recent_critical = 0

        for error in self._errors:
            by_category[error.category] += 1
            by_severity[error.severity] += 1
            if error.severity == "critical" and error.timestamp > one_hour_ago:
                recent_critical += 1

        return {
            "total": len(self._errors),
            "by_category": by_category,
            "by_severity": by_severity,
            "recent_critical": recent_critical,
        }

    def health_check(self) -> tuple[bool, list[str]]:
        """Return (healthy, issues) based on the recorded history."""
        stats = self.statistics()
        issues = []
        if stats["recent_critical"] > 3:
            issues.append(f"Too many critical errors in the last hour: {stats['recent_critical']}")
        if stats["total"] > 50:
            issues.append(f"High total error count: {stats['total']}")
        if stats["by_category"]["system"] > 5:
            issues.append(f"Multiple system errors detected: {stats['by_category']['system']}")
        return not issues, issues

    def recovery_suggestions(self) -> list[str]:
        """Suggest recovery steps from error patterns."""
        stats = self.statistics()
        suggestions = []
        if stats["by_category"]["validation"] > 5:
            suggestions.append("Consider restarting the game to reset the game state")
        if stats["by_category"]["system"] > 3:
            suggestions.append("Check system resources (memory, disk space)")
        if stats["by_category"]["user_input"] > 10:
            suggestions.append("Review command syntax")
        if stats["recent_critical"] > 0:
            suggestions.append("Recent critical errors detected - restart recommended")
        if not suggestions:
            suggestions.append("System appears stable")
        return suggestions

    def clear(self) -> None:
        """Drop all recorded errors."""
        self._errors.clear()

    def __len__(self) -> int:
        return len(self._errors)
