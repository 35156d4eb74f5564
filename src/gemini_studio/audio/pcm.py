"""Raw PCM decoding for text-to-speech output.

Speech comes back as base64 of 16-bit little-endian signed mono samples at
24 kHz. Decoding maps each sample ``s`` to ``s / 32768.0`` with no resampling
or clipping.
"""

from __future__ import annotations

import base64
import binascii
import dataclasses
import io
import struct
import wave

from gemini_studio.exceptions import CorruptAudioPayloadError

SAMPLE_RATE_HZ = 24000
CHANNELS = 1
SAMPLE_WIDTH_BYTES = 2
_SCALE = 32768.0


@dataclasses.dataclass(frozen=True, slots=True)
class AudioSampleBuffer:
    """Normalized mono samples in [-1.0, 1.0)."""

    samples: tuple[float, ...]
    sample_rate: int = SAMPLE_RATE_HZ
    channels: int = CHANNELS

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def duration_seconds(self) -> float:
        return len(self.samples) / self.sample_rate


def decode_pcm16(payload: str) -> AudioSampleBuffer:
    """Decode base64 PCM16 into an ``AudioSampleBuffer``.

    Raises:
        CorruptAudioPayloadError: If the payload is not valid base64 or its
            byte length is odd.
    """
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError, TypeError) as e:
        raise CorruptAudioPayloadError(f"Audio payload is not valid base64: {e}") from e

    if len(raw) % SAMPLE_WIDTH_BYTES:
        raise CorruptAudioPayloadError(
            f"PCM16 payload must have an even byte length, got {len(raw)}"
        )

    count = len(raw) // SAMPLE_WIDTH_BYTES
    ints = struct.unpack(f"<{count}h", raw)
    return AudioSampleBuffer(samples=tuple(s / _SCALE for s in ints))


def encode_wav(buffer: AudioSampleBuffer) -> bytes:
    """Render a buffer as a 16-bit PCM WAV file.

    Samples are converted back with the same 32768 scale, so decoded input
    round-trips to the original integers.
    """
    ints = [max(-32768, min(32767, round(s * _SCALE))) for s in buffer.samples]
    out = io.BytesIO()
    with wave.open(out, "wb") as wav:
        wav.setnchannels(buffer.channels)
        wav.setsampwidth(SAMPLE_WIDTH_BYTES)
        wav.setframerate(buffer.sample_rate)
        wav.writeframes(struct.pack(f"<{len(ints)}h", *ints))
    return out.getvalue()
