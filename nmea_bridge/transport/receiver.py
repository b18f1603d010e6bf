"""NmeaReceiver: owns the socket and the background receive loop.

Three socket setups are supported, selected by ``BridgeConfig``:

* UDP listen (default): bind ``bind_host:port`` and accept datagrams from any
  sender. This is how phone bridge apps are normally used: the phone sends
  to this machine's address.
* UDP connect: connect to ``host:port`` and receive from that peer only.
* TCP connect: connect to ``host:port`` and read a continuous byte stream.

Reading strategy:
    Every run gets its own daemon thread, cancellation event and line
    framer. Socket reads block for at most ``receive_timeout`` seconds; a
    timeout is only the tick that lets the loop re-check the cancellation
    event and is never reported. ``stop()`` sets the event and shuts the
    socket down so a blocked read returns immediately.

Notifications:
    ``on_status``, ``on_error`` and ``on_sentence`` are called synchronously
    on the loop thread, in arrival order. Each run only notifies while its
    own cancellation event is clear, so nothing from a stopped run can be
    delivered after ``stop()`` returns, even if its thread is slow to exit.

Failure policy:
    A connection or socket error is reported through ``on_error`` and ends
    the run. There is no automatic retry; call ``start()`` again.
"""

import contextlib
import ipaddress
import logging
import socket
import threading
from types import TracebackType

from nmea_bridge.config import DEFAULT_CONFIG, BridgeConfig, Transport
from nmea_bridge.transport.framing import LineFramer
from nmea_bridge.transport.observers import Observers

__all__ = ["NmeaReceiver"]

logger = logging.getLogger(__name__)

_DATAGRAM_SIZE = 65535
_STREAM_CHUNK = 1024
_JOIN_GRACE = 1.0  # seconds added to the poll interval when joining the loop


class _Run:
    """State belonging to a single start()/stop() cycle."""

    def __init__(self, max_line_length: int) -> None:
        self.cancelled = threading.Event()
        self.framer = LineFramer(max_line_length)
        self.sock: socket.socket | None = None
        self.thread: threading.Thread | None = None

    def close_socket(self) -> None:
        sock = self.sock
        if sock is None:
            return
        with contextlib.suppress(OSError):
            sock.shutdown(socket.SHUT_RDWR)
        sock.close()


class NmeaReceiver:
    """Receives NMEA sentences over UDP or TCP on a background thread.

    Usage::

        receiver = NmeaReceiver(BridgeConfig(port=11123))
        receiver.on_sentence.subscribe(aggregator.handle_sentence)
        receiver.on_error.subscribe(print)
        receiver.start()
        ...
        receiver.stop()

    or as a context manager, which starts on entry and stops on exit.

    Args:
        config: Static bridge configuration.
    """

    def __init__(self, config: BridgeConfig = DEFAULT_CONFIG) -> None:
        self._config = config
        self.on_status: Observers[str] = Observers("status")
        self.on_error: Observers[str] = Observers("error")
        self.on_sentence: Observers[str] = Observers("sentence")
        self._lock = threading.Lock()
        self._run: _Run | None = None
        self._local_address: tuple[str, int] | None = None
        # Run owned by the loop thread that is asking, if any
        self._loop_state = threading.local()

    def __enter__(self) -> "NmeaReceiver":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.stop()

    @property
    def config(self) -> BridgeConfig:
        return self._config

    @property
    def running(self) -> bool:
        """True while a receive loop thread is alive."""
        run = self._run
        return run is not None and run.thread is not None and run.thread.is_alive()

    @property
    def address(self) -> str:
        """Configured IP this receiver binds to (UDP listen) or connects to."""
        if self._config.is_datagram_listen:
            return self._config.bind_host
        return self._config.host

    @property
    def local_address(self) -> tuple[str, int] | None:
        """Local ``(host, port)`` of the running socket, None once stopped."""
        return self._local_address

    # --- lifecycle --------------------------------------------------------------

    def start(self) -> None:
        """Start a fresh receive loop, tearing down any running one first.

        An invalid address is reported through ``on_error`` and no loop is
        started. Called from an observer on a loop thread whose run has
        already been stopped by another thread, it does nothing.
        """
        own = getattr(self._loop_state, "run", None)
        if own is not None and own.cancelled.is_set():
            return
        stopped = self._stop()

        address = self.address
        try:
            ipaddress.ip_address(address)
        except ValueError:
            self.on_error.notify(f"Invalid IP '{address}'")
            return

        with self._lock:
            if own is not None and own is not stopped and own.cancelled.is_set():
                return
            # Another thread may have started a run since _stop() returned
            replaced = self._detach()
            run = _Run(self._config.max_line_length)
            run.thread = threading.Thread(
                target=self._loop,
                args=(run,),
                name="nmea-receiver",
                daemon=True,
            )
            self._run = run
            run.thread.start()
        if replaced is not None:
            self._join(replaced)

    def stop(self) -> None:
        """Cancel the receive loop, close its socket and wait for it to exit.

        Safe to call when nothing is running. When called from an observer on
        the loop thread itself the join is skipped; the loop exits as soon as
        the observer returns. ``local_address`` is cleared.
        """
        self._stop()

    def _stop(self) -> _Run | None:
        with self._lock:
            run = self._detach()
        if run is None:
            return None
        self._join(run)
        self.on_status.notify("Receiver stopped.")
        return run

    def _detach(self) -> _Run | None:
        """Cancel the current run and close its socket; caller holds the lock."""
        run = self._run
        if run is None:
            return None
        self._run = None
        self._local_address = None
        run.cancelled.set()
        run.close_socket()
        return run

    def _join(self, run: _Run) -> None:
        thread = run.thread
        if thread is None or thread is threading.current_thread():
            return
        bound = max(self._config.receive_timeout, self._config.connect_timeout)
        bound += _JOIN_GRACE
        thread.join(bound)
        if thread.is_alive():
            logger.warning("Receive loop did not exit within %.1fs", bound)

    # --- receive loop -----------------------------------------------------------

    def _notify(self, run: _Run, observers: Observers[str], message: str) -> None:
        if not run.cancelled.is_set():
            observers.notify(message)

    def _dispatch(self, run: _Run, data: bytes) -> None:
        for line in run.framer.feed(data):
            if run.cancelled.is_set():
                return
            self.on_sentence.notify(line)

    def _attach(self, run: _Run, sock: socket.socket) -> bool:
        """Hand *sock* to the run; returns False if the run was cancelled meanwhile."""
        run.sock = sock
        if run.cancelled.is_set():
            run.close_socket()
            return False
        return True

    def _publish_local_address(self, run: _Run, sock: socket.socket) -> None:
        with self._lock:
            if self._run is run:
                self._local_address = sock.getsockname()

    def _loop(self, run: _Run) -> None:
        self._loop_state.run = run
        label = self._config.transport.name
        try:
            if self._config.is_datagram_listen:
                self._receive_datagrams(run, listen=True)
            elif self._config.transport is Transport.UDP:
                self._receive_datagrams(run, listen=False)
            else:
                self._receive_stream(run)
        except OSError as e:
            if not run.cancelled.is_set():
                logger.debug("%s receive loop failed", label, exc_info=True)
                self._notify(run, self.on_error, f"{label} error: {e}")
                if self._config.transport is Transport.TCP:
                    self._notify(
                        run,
                        self.on_status,
                        f"Hint: check that the device is serving on "
                        f"{self._config.host}:{self._config.port} on this "
                        f"network, or try UDP mode.",
                    )
        finally:
            run.close_socket()
            self._notify(run, self.on_status, f"{label} closed.")

    def _receive_datagrams(self, run: _Run, listen: bool) -> None:
        config = self._config
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        if not self._attach(run, sock):
            return
        sock.settimeout(config.receive_timeout)
        if listen:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((config.bind_host, config.port))
            self._publish_local_address(run, sock)
            host, port = sock.getsockname()
            self._notify(run, self.on_status, f"UDP listening on {host}:{port} ...")
        else:
            sock.connect((config.host, config.port))
            self._publish_local_address(run, sock)
            self._notify(
                run,
                self.on_status,
                f"UDP connected to {config.host}:{config.port} (receiving) ...",
            )

        while not run.cancelled.is_set():
            try:
                data = sock.recv(_DATAGRAM_SIZE)
            except TimeoutError:
                continue
            self._dispatch(run, data)

    def _receive_stream(self, run: _Run) -> None:
        config = self._config
        self._notify(
            run, self.on_status, f"TCP connecting to {config.host}:{config.port} ..."
        )
        sock = socket.create_connection(
            (config.host, config.port), timeout=config.connect_timeout
        )
        if not self._attach(run, sock):
            return
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        sock.settimeout(config.receive_timeout)
        self._publish_local_address(run, sock)
        self._notify(run, self.on_status, "TCP connected.")

        while not run.cancelled.is_set():
            try:
                data = sock.recv(_STREAM_CHUNK)
            except TimeoutError:
                continue
            if not data:
                self._notify(run, self.on_status, "TCP connection closed by peer.")
                return
            self._dispatch(run, data)
