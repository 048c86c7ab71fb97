"""
Raw PCM helpers for text-to-speech playback
"""
import base64
import io
import struct
import wave
from typing import List, Union

DEFAULT_SAMPLE_RATE = 24000
DEFAULT_CHANNELS = 1


def decode_base64(data: Union[str, bytes]) -> bytes:
    """Decode a base64 audio payload to raw bytes"""
    return base64.b64decode(data)


def pcm16_to_float(pcm: bytes, num_channels: int = DEFAULT_CHANNELS) -> List[List[float]]:
    """Split little-endian signed 16-bit PCM into per-channel samples in [-1.0, 1.0)"""
    if num_channels < 1:
        raise ValueError("num_channels must be at least 1")

    sample_count = len(pcm) // 2
    samples = struct.unpack(f"<{sample_count}h", pcm[:sample_count * 2])
    frame_count = sample_count // num_channels

    channels = []
    for channel in range(num_channels):
        channels.append([samples[i * num_channels + channel] / 32768.0 for i in range(frame_count)])
    return channels


def pcm_to_wav(pcm: bytes, channels: int = DEFAULT_CHANNELS, sample_width: int = 2,
               sample_rate: int = DEFAULT_SAMPLE_RATE) -> bytes:
    """Wrap raw PCM data in a WAV container in memory"""
    buffer = io.BytesIO()
    with wave.open(buffer, 'wb') as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm)
    return buffer.getvalue()


def duration_seconds(pcm: bytes, channels: int = DEFAULT_CHANNELS, sample_width: int = 2,
                     sample_rate: int = DEFAULT_SAMPLE_RATE) -> float:
    return len(pcm) / float(channels * sample_width * sample_rate)
