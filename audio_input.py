# audio_input.py
import logging
import threading

import numpy as np

try:
    import sounddevice as sd
except (ImportError, OSError):
    sd = None

logger = logging.getLogger(__name__)

WINDOW_SIZE = 256                 # samples per transform -> 128 bins
SMOOTHING   = 0.8                 # time constant between successive reads
MIN_DB      = -100.0
MAX_DB      = -30.0


def _blackman(n):
    a0, a1, a2 = 0.42, 0.5, 0.08
    k = np.arange(n) / n
    return a0 - a1*np.cos(2*np.pi*k) + a2*np.cos(4*np.pi*k)


def byte_spectrum(samples, prev, out):
    """
    One analyser step over a time-domain window.
      samples  float window, len N
      prev     smoothed magnitudes (N/2,), updated in place
      out      uint8 buffer (N/2,), overwritten in place
    Blackman window -> |rfft|/N -> smoothing -> dB -> [MIN_DB..MAX_DB] onto [0..255].
    """
    n = len(samples)
    spec = np.abs(np.fft.rfft(samples * _blackman(n)))[: n // 2] / n
    prev *= SMOOTHING
    prev += (1.0 - SMOOTHING) * spec
    with np.errstate(divide="ignore"):
        db = 20.0 * np.log10(prev)
    scaled = np.floor((255.0 / (MAX_DB - MIN_DB)) * (db - MIN_DB))
    out[:] = np.clip(np.nan_to_num(scaled, neginf=0.0), 0, 255).astype(np.uint8)
    return out


class AudioSource:
    """
    Default-microphone spectrum source using sounddevice.
      • Opens the input stream once, at construction. No retry.
      • On any failure the reason is logged and frames stay all-zero.
    Public fields:
      .source  'mic' | 'none'
      .device  str
      .ok      bool
    """
    def __init__(self, samplerate=None, window_size=WINDOW_SIZE, device=None):
        self.source = "none"
        self.device = "n/a"
        self.ok     = False

        self._n      = int(window_size)
        self._window = np.zeros(self._n, float)      # written by the audio thread
        self._snap   = np.zeros(self._n, float)
        self._smooth = np.zeros(self._n // 2, float)
        self._frame  = np.zeros(self._n // 2, np.uint8)
        self._lock   = threading.Lock()
        self._stream = None

        if sd is None:
            logger.error("[AudioSource] sounddevice not available; audio reactive disabled.")
            return

        try:
            self._stream = sd.InputStream(
                device=device,
                samplerate=samplerate,
                channels=1,
                dtype="float32",
                callback=self._callback,
            )
            self._stream.start()
        except (sd.PortAudioError, OSError, ValueError) as e:
            logger.error(f"[AudioSource] Error accessing microphone: {e}")
            self._stream = None
            return

        self.ok = True
        self.source = "mic"
        self.device = "default input" if device is None else str(device)
        logger.info(f"[AudioSource] Using MIC: {self.device} @ {self._stream.samplerate:.0f}Hz")

    @property
    def bin_count(self):
        return self._n // 2

    def close(self):
        if self._stream is not None:
            try:
                self._stream.stop()
            finally:
                self._stream.close()
                self._stream = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def get_frequency_frame(self):
        """Latest 128 byte magnitudes; the same array is refilled on every call."""
        if not self.ok:
            return self._frame
        with self._lock:
            self._snap[:] = self._window
        return byte_spectrum(self._snap, self._smooth, self._frame)

    # ---------- internals ----------
    def _callback(self, indata, frames, time_info, status):
        if status:
            logger.debug(f"[AudioSource] stream status: {status}")
        x = np.asarray(indata, float)
        x = x.mean(axis=1) if x.ndim > 1 else x
        k = len(x)
        with self._lock:
            if k >= self._n:
                self._window[:] = x[-self._n:]
            elif k:
                self._window[:-k] = self._window[k:]
                self._window[-k:] = x
