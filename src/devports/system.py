"""Live port probing for devports."""

import socket

DEFAULT_HOST = "localhost"
DEFAULT_TIMEOUT = 1.0  # seconds


class SystemScanner:
    """Check which ports are actually in use on this machine."""

    def __init__(self, host: str = DEFAULT_HOST, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize scanner.

        Args:
            host: Host to connect to
            timeout: Connect timeout in seconds
        """
        self.host = host
        self.timeout = timeout

    def is_port_live(self, port: int, host: str | None = None) -> bool:
        """Test whether something is listening on a port.

        A successful TCP connect means the port is in use. Connection errors
        and timeouts are reported as not live; the result is best-effort and
        may be stale by the time a caller binds the port.

        Args:
            port: Port number to test
            host: Host to connect to, defaults to the scanner's host

        Returns:
            True if a connection succeeded, False otherwise
        """
        try:
            with socket.create_connection((host or self.host, port), timeout=self.timeout):
                return True
        except OSError:
            return False

    def find_available_port(
        self,
        start: int,
        end: int,
        excluded: set[int],
        host: str | None = None,
    ) -> int | None:
        """Find the first port in a range that is neither excluded nor live.

        Args:
            start: First port of the range (inclusive)
            end: Last port of the range (inclusive)
            excluded: Ports already held in the registry
            host: Host to connect to

        Returns:
            The first available port, or None if the range is exhausted
        """
        for port in range(start, end + 1):
            if port in excluded:
                continue
            if not self.is_port_live(port, host):
                return port
        return None
