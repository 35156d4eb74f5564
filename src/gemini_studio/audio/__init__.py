"""Audio payload decoding."""

from .pcm import SAMPLE_RATE_HZ, AudioSampleBuffer, decode_pcm16, encode_wav

__all__ = ["SAMPLE_RATE_HZ", "AudioSampleBuffer", "decode_pcm16", "encode_wav"]
