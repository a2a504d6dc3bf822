"""
bezierrope - Sensor Input
Receives device attitude (pitch/roll) over UDP and keeps only the newest sample.

Packet formats (UTF-8, radians):
    "0.12,-0.4"                      pitch,roll
    {"pitch": 0.12, "roll": -0.4}    JSON object
"""

import json
import math
import socket
import threading
from typing import Callable, Optional

from config import Config
from logging_utils import log_event
from tilt_mapper import TiltSample


class LatestTiltSlot:
    """Single-slot channel: writers overwrite, the reader takes the newest sample once."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sample: Optional[TiltSample] = None
        self._fresh = False

    def put(self, sample: TiltSample) -> None:
        with self._lock:
            self._sample = sample
            self._fresh = True

    def take(self) -> Optional[TiltSample]:
        """Return the newest unread sample, or None if nothing arrived since the last take."""
        with self._lock:
            if not self._fresh:
                return None
            self._fresh = False
            return self._sample

    def peek(self) -> Optional[TiltSample]:
        with self._lock:
            return self._sample


def parse_tilt_packet(payload: bytes) -> TiltSample:
    """Decode one datagram. Raises ValueError on anything malformed."""
    text = payload.decode('utf-8').strip()
    if not text:
        raise ValueError("empty packet")

    if text.startswith('{'):
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("JSON packet must be an object")
        try:
            pitch, roll = float(data['pitch']), float(data['roll'])
        except (KeyError, TypeError) as exc:
            raise ValueError(f"bad JSON packet: {exc}") from exc
    else:
        parts = [p.strip() for p in text.split(',')]
        if len(parts) != 2:
            raise ValueError(f"expected 'pitch,roll', got {text!r}")
        pitch, roll = float(parts[0]), float(parts[1])

    if not (math.isfinite(pitch) and math.isfinite(roll)):
        raise ValueError(f"non-finite angles in {text!r}")
    return TiltSample(pitch=pitch, roll=roll)


class UdpTiltReceiver:
    """
    Background UDP listener feeding a LatestTiltSlot.
    Malformed packets are dropped; the slot keeps the last good sample.
    """

    def __init__(self, config: Config, slot: LatestTiltSlot,
                 status_callback: Optional[Callable[[str, bool], None]] = None):
        """
        Args:
            config: Application configuration (sensor.host / sensor.port)
            slot: Destination for decoded samples
            status_callback: Called with (status_message, is_listening)
        """
        self.config = config
        self.slot = slot
        self.status_callback = status_callback

        self.socket: Optional[socket.socket] = None
        self.running = False
        self.packets_received = 0
        self.packets_dropped = 0

        self.worker_thread: Optional[threading.Thread] = None

    @property
    def address(self):
        """Bound (host, port), useful when port 0 was requested."""
        if self.socket is None:
            return None
        return self.socket.getsockname()

    def start(self) -> bool:
        """Bind the socket and start the worker. Returns False if binding failed."""
        if self.running:
            return True
        if self.socket is not None:
            # Worker died on a receive error; release the old socket first
            self.stop()

        host = self.config.sensor.host
        port = self.config.sensor.port
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
            sock.settimeout(max(0.01, self.config.sensor.recv_timeout_ms / 1000.0))
        except OSError as e:
            log_event("ERROR", "Sensor", "Bind failed", host=host, port=port, error=e)
            self._notify_status(f"Sensor bind failed: {e}", False)
            return False

        self.socket = sock
        self.running = True
        self.worker_thread = threading.Thread(target=self._worker_loop, daemon=True)
        self.worker_thread.start()

        bound_host, bound_port = sock.getsockname()[:2]
        log_event("INFO", "Sensor", "Listening", host=bound_host, port=bound_port)
        self._notify_status(f"Listening for tilt on UDP {bound_host}:{bound_port}", True)
        return True

    def stop(self) -> None:
        """Stop the worker and close the socket"""
        if self.worker_thread is None and self.socket is None:
            return
        self.running = False
        if self.worker_thread is not None:
            self.worker_thread.join(timeout=1.0)
            self.worker_thread = None
        if self.socket is not None:
            self.socket.close()
            self.socket = None
        log_event("INFO", "Sensor", "Stopped",
                  received=self.packets_received, dropped=self.packets_dropped)
        self._notify_status("Sensor stopped", False)

    def _worker_loop(self) -> None:
        """Receive datagrams until stopped"""
        while self.running:
            try:
                payload, _ = self.socket.recvfrom(1024)
            except socket.timeout:
                continue
            except OSError as e:
                if self.running:
                    log_event("ERROR", "Sensor", "Receive error", error=e)
                    self._notify_status(f"Sensor error: {e}", False)
                    self.running = False
                break

            try:
                sample = parse_tilt_packet(payload)
            except (UnicodeDecodeError, ValueError) as e:
                self.packets_dropped += 1
                log_event("DEBUG", "Sensor", "Dropped packet", error=e)
                continue

            self.packets_received += 1
            self.slot.put(sample)

    def _notify_status(self, message: str, listening: bool) -> None:
        if self.status_callback:
            self.status_callback(message, listening)
