"""SSH CLI transport for ArubaOS switches."""

from __future__ import annotations

import re
import time
from abc import ABC, abstractmethod
from types import TracebackType
from typing import Self

import paramiko
from loguru import logger

from arubaexporter.exceptions import AuthenticationError, SSHError

# Prompt patterns for the ArubaOS-Switch CLI
PROMPT_PATTERN = re.compile(r"[\r\n][\w\-.]+(?:\([^\)]*\))?[>#]\s*$")
ANY_KEY_PATTERN = re.compile(r"Press any key to continue", re.IGNORECASE)
MORE_PATTERN = re.compile(r"-- MORE --|--More--", re.IGNORECASE)
ANSI_PATTERN = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]|\x1bE")

DEFAULT_TIMEOUT = 5
DEFAULT_BATCH_SIZE = 10000
READ_DELAY = 0.1


def strip_ansi(text: str) -> str:
    """Remove VT100 escape sequences emitted by the switch CLI."""
    return ANSI_PATTERN.sub("", text)


class BaseTransport(ABC):
    """Abstract base class for device command transports."""

    def __init__(self, host: str, username: str, password: str, port: int | None = None):
        self.host = host
        self.username = username
        self.password = password
        self.port = port

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to the device."""

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to the device."""

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if transport is currently connected."""

    @abstractmethod
    def send_command(self, command: str) -> str:
        """Run a single command and return its output."""

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()


class ArubaCLITransport(BaseTransport):
    """SSH transport using a paramiko interactive shell.

    Authenticates with a password, a private key file, or both. Paging is
    disabled right after login so report commands return in one piece.
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str = "",
        port: int = 22,
        keyfile: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        super().__init__(host, username, password, port)
        self.keyfile = keyfile or None
        self.timeout = timeout
        self.batch_size = batch_size
        self._client: paramiko.SSHClient | None = None
        self._shell: paramiko.Channel | None = None

    def connect(self) -> None:
        """Establish SSH connection, open interactive shell, disable paging."""
        self._client = paramiko.SSHClient()
        self._client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            self._client.connect(
                hostname=self.host,
                port=self.port or 22,
                username=self.username,
                password=self.password or None,
                key_filename=self.keyfile,
                look_for_keys=False,
                allow_agent=False,
                timeout=self.timeout,
            )
        except paramiko.AuthenticationException as e:
            self._client = None
            raise AuthenticationError(f"SSH authentication failed for {self.host}: {e}") from e
        except Exception as e:
            self._client = None
            raise SSHError(f"SSH connection to {self.host} failed: {e}") from e

        try:
            self._shell = self._client.invoke_shell(width=512)
            self._shell.settimeout(self.timeout)

            # Login banner, possibly followed by "Press any key to continue"
            self._read_until_prompt()
            self.send_command("no page")
        except SSHError:
            self.disconnect()
            raise
        except Exception as e:
            self.disconnect()
            raise SSHError(f"Opening shell on {self.host} failed: {e}") from e
        logger.debug(f"SSH connected to {self.host}")

    def disconnect(self) -> None:
        """Close SSH shell and connection."""
        if self._shell:
            try:
                self._shell.close()
            except Exception as e:
                logger.debug(f"Closing shell on {self.host} failed: {e}")
            self._shell = None
        if self._client:
            try:
                self._client.close()
            except Exception as e:
                logger.debug(f"Closing SSH client on {self.host} failed: {e}")
            self._client = None

    def is_connected(self) -> bool:
        """Check if SSH connection and shell are active."""
        if self._client is None or self._shell is None:
            return False
        transport = self._client.get_transport()
        return transport is not None and transport.is_active() and not self._shell.closed

    def send_command(self, command: str, timeout: int | None = None) -> str:
        """Send a single command and wait for the prompt.

        Args:
            command: CLI command to execute.
            timeout: Maximum seconds to wait for response.

        Returns:
            Command output with escape sequences, echo and prompt removed.
        """
        self._ensure_connected()
        assert self._shell is not None
        self._shell.send((command + "\n").encode())
        output = strip_ansi(self._read_until_prompt(timeout=timeout))
        return self._clean_output(output, command)

    @staticmethod
    def _clean_output(output: str, command: str) -> str:
        lines = output.splitlines()
        # Strip the echoed command
        while lines and not lines[0].strip():
            lines = lines[1:]
        if lines and command in lines[0]:
            lines = lines[1:]
        # Strip trailing prompt line
        if lines and PROMPT_PATTERN.search("\n" + lines[-1]):
            lines = lines[:-1]
        return "\n".join(lines).rstrip()

    def _read_until_prompt(self, timeout: int | None = None) -> str:
        """Read shell output until a CLI prompt is detected.

        Answers "Press any key" and pager prompts on the way.

        Raises:
            SSHError: If no prompt is seen within ``timeout`` seconds.
        """
        timeout = timeout or self.timeout
        output = ""
        start = time.time()
        assert self._shell is not None

        while time.time() - start < timeout:
            if self._shell.recv_ready():
                chunk = self._shell.recv(self.batch_size).decode("utf-8", errors="replace")
                output += chunk
                tail = strip_ansi(output[-256:])

                if ANY_KEY_PATTERN.search(tail):
                    output = ANY_KEY_PATTERN.sub("", output)
                    self._shell.send(b"\n")
                    continue
                if MORE_PATTERN.search(tail):
                    output = MORE_PATTERN.sub("", output)
                    self._shell.send(b" ")
                    continue
                if PROMPT_PATTERN.search(tail):
                    return output
            else:
                time.sleep(READ_DELAY)

        raise SSHError(f"Timed out after {timeout}s waiting for prompt on {self.host}")

    def _ensure_connected(self) -> None:
        if not self.is_connected():
            raise SSHError("Not connected. Call connect() first.")
