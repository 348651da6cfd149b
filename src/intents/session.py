"""Interactive read -> score -> report -> (maybe log) loop.

The session is a two-state machine. RUNNING processes one line per step()
and moves to STOPPED on an exit sentinel (blank line, "exit" in any casing)
or end of input. Predictions are reported on the output stream; failures on
a single line are reported there too and do not stop the session.
"""
from __future__ import annotations

import enum
import sys
from typing import List, Optional, Sequence, TextIO

from core.errors import LabelsUnavailable
from .engine import PredictionEngine, ranked_scores
from .low_confidence import LowConfidenceLog
from .models import Prediction, UserQuery

BANNER = "=== Intent Classifier (Interactive Mode) ==="
HINT = "Type a query (or 'exit' to quit):\n"
PROMPT = "User: "
EXIT_TOKEN = "exit"


class SessionState(enum.Enum):
    RUNNING = "running"
    STOPPED = "stopped"


def is_exit_sentinel(line: str) -> bool:
    return not line.strip() or line.lower() == EXIT_TOKEN


class InteractiveSession:
    def __init__(self, engine: PredictionEngine, log: LowConfidenceLog, *,
                 labels: Optional[Sequence[str]] = None, show_scores: bool = False,
                 stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.engine = engine
        self.log = log
        self.labels = list(labels) if labels is not None else None
        self.show_scores = show_scores
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.state = SessionState.RUNNING
        self.history: List[Prediction] = []

    def _write(self, msg: str = "") -> None:
        print(msg, file=self.stdout)

    def banner(self) -> None:
        self._write(BANNER)
        self._write(HINT)

    def _read_line(self) -> Optional[str]:
        self.stdout.write(PROMPT)
        self.stdout.flush()
        line = self.stdin.readline()
        if line == '':
            return None  # EOF
        return line.rstrip('\r\n')

    def _report_breakdown(self, prediction: Prediction) -> None:
        try:
            pairs = ranked_scores(prediction, self.labels)
        except LabelsUnavailable as e:
            self._write("Confidence scores unavailable or mismatch between label count and score length.")
            self._write(str(e))
            return
        self._write("Confidence Scores (sorted):")
        for label, score in pairs:
            self._write(f"   {label}: {score:.2%}")

    def handle(self, text: str) -> Optional[Prediction]:
        """Score one non-sentinel line and report it."""
        try:
            prediction = self.engine.predict(UserQuery(text=text))
        except ValueError as e:
            self._write(f"Could not score input: {e}\n")
            return None
        self.history.append(prediction)
        max_score = prediction.max_score
        self._write(f"🤖 Predicted Intent: {prediction.intent}")
        if self.show_scores:
            self._report_breakdown(prediction)
        self._write(f"📊 Confidence: {max_score:.2%}\n")
        if self.log.is_low(prediction):
            try:
                self.log.append(text, prediction)
            except (OSError, UnicodeError, ValueError) as e:
                self._write(f"⚠️ Low confidence — could not write {self.log.path}: {e}\n")
            else:
                self._write("⚠️ Low confidence — logged for review.\n")
        return prediction

    def step(self) -> SessionState:
        if self.state is SessionState.STOPPED:
            return self.state
        line = self._read_line()
        if line is None or is_exit_sentinel(line):
            self.state = SessionState.STOPPED
            return self.state
        self.handle(line)
        return self.state

    def run(self) -> int:
        self.banner()
        while self.step() is SessionState.RUNNING:
            pass
        return 0


__all__ = ['SessionState', 'InteractiveSession', 'is_exit_sentinel', 'BANNER', 'HINT', 'PROMPT']
