"""
Comment Converter
=================

Passes linked comment text through an optional external converter
(for example ``pandoc -f markdown -t html``). The converter reads the text
on stdin and writes markup on stdout.

Without a configured command, backslash escapes in front of link trigger
characters are removed and the text is otherwise returned unchanged.
Converter failures never stop processing: a warning is logged and the
unconverted text is returned.
"""

from dataclasses import dataclass
import logging
import shlex
import subprocess
import threading
import time
from typing import List, Optional

from scomment_core.config.settings import ConverterConfig
from scomment_core.errors import ConverterError
from scomment_core.mapping.link_resolver import strip_escapes

logger = logging.getLogger(__name__)

# How often a running converter is checked for cancellation (seconds)
POLL_INTERVAL = 0.1


def parse_command(command: str) -> List[str]:
    """
    Split a converter command line into arguments.

    Raises:
        ValueError: If the command has unbalanced quotes
    """
    try:
        return shlex.split(command)
    except ValueError as e:
        raise ValueError(f"Invalid converter command {command!r}: {e}") from e


@dataclass
class ConversionResult:
    """
    Outcome of one conversion.

    Attributes:
        text: Converted markup, or the unconverted input on failure
        converted: True if the external converter produced the text
        error: Why the converter failed (None on success or in fallback mode)
    """
    text: str
    converted: bool = False
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        """True if a configured converter failed and the input was kept."""
        return self.error is not None


class CommentConverter:
    """
    Converts comment text into markup.

    Example:
        converter = CommentConverter(ConverterConfig(command="pandoc -t html"))
        html = converter.convert("Some *emphasis*")
    """

    def __init__(self, config: Optional[ConverterConfig] = None):
        self._config = config or ConverterConfig()
        self._args = parse_command(self._config.command) if self._config.enabled else []

    @property
    def enabled(self) -> bool:
        """True when an external command is configured."""
        return bool(self._args)

    @property
    def command(self) -> str:
        return self._config.command

    def convert(self,
                text: str,
                timeout: Optional[float] = None,
                cancel_event: Optional[threading.Event] = None) -> str:
        """
        Convert text, falling back to the input on converter failure.

        Args:
            text: Section text, already passed through the link resolver
            timeout: Seconds to wait for the converter (default from config)
            cancel_event: When set, a running converter is abandoned

        Returns:
            Converted markup, or the input text if conversion failed
        """
        return self.run(text, timeout=timeout, cancel_event=cancel_event).text

    def run(self,
            text: str,
            timeout: Optional[float] = None,
            cancel_event: Optional[threading.Event] = None) -> ConversionResult:
        """Convert text and report whether the external converter was used."""
        if not self.enabled:
            return ConversionResult(text=strip_escapes(text))

        try:
            converted = self.run_command(text, timeout=timeout, cancel_event=cancel_event)
        except ConverterError as e:
            logger.warning(f"Error interpreting comment with '{self.command}': {e}")
            return ConversionResult(text=text, error=str(e))

        return ConversionResult(text=converted, converted=True)

    def run_command(self,
                    text: str,
                    timeout: Optional[float] = None,
                    cancel_event: Optional[threading.Event] = None) -> str:
        """
        Run the external converter once.

        The whole text is written to the converter's stdin, which is then
        closed, and stdout is read to the end.

        Raises:
            ConverterError: If the process cannot be started, times out, is
                cancelled, exits non-zero, or produces undecodable output
        """
        if not self.enabled:
            raise ConverterError("No converter command configured")

        if timeout is None:
            timeout = self._config.timeout
        encoding = self._config.encoding

        if cancel_event is not None and cancel_event.is_set():
            raise ConverterError("Conversion cancelled")

        try:
            proc = subprocess.Popen(
                self._args,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            raise ConverterError(f"Could not start converter: {e}") from e

        try:
            stdout, stderr = self._communicate(proc, text.encode(encoding), timeout, cancel_event)
        except BaseException:
            proc.kill()
            proc.communicate()
            raise

        if proc.returncode != 0:
            message = stderr.decode(encoding, errors="replace").strip()
            raise ConverterError(f"Converter exited with status {proc.returncode}: {message}")

        try:
            return stdout.decode(encoding)
        except UnicodeDecodeError as e:
            raise ConverterError(f"Converter output is not valid {encoding}: {e}") from e

    def _communicate(self, proc, data: bytes, timeout: Optional[float],
                     cancel_event: Optional[threading.Event]):
        """Feed stdin and drain the pipes, honouring timeout and cancellation."""
        deadline = None if timeout is None else time.monotonic() + timeout
        pending: Optional[bytes] = data

        while True:
            wait = POLL_INTERVAL if cancel_event is not None else None
            if deadline is not None:
                remaining = max(deadline - time.monotonic(), 0.0)
                wait = remaining if wait is None else min(wait, remaining)

            try:
                return proc.communicate(pending, timeout=wait)
            except subprocess.TimeoutExpired:
                pending = None
            except OSError as e:
                raise ConverterError(f"Could not communicate with converter: {e}") from e

            if cancel_event is not None and cancel_event.is_set():
                raise ConverterError("Conversion cancelled")
            if deadline is not None and time.monotonic() >= deadline:
                raise ConverterError(f"Converter timed out after {timeout}s")
