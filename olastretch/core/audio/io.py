# olastretch/core/audio/io.py

"""
Decodes audio files into mono sample buffers and encodes results back to disk.

Reading goes through librosa (soundfile, with audioread as a fallback for
compressed formats); writing goes through soundfile.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import librosa
import numpy as np
import soundfile as sf
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

SUPPORTED_READ_EXTENSIONS = {f".{fmt.lower()}" for fmt in sf.available_formats()}
SUPPORTED_READ_EXTENSIONS.add(".mp3")

# soundfile cannot reliably encode mp3
SUPPORTED_WRITE_EXTENSIONS = {f".{fmt.lower()}" for fmt in sf.available_formats()} - {".mp3"}


def load_audio(
    file_path: Path,
    sr: Optional[int] = None,
    mono: bool = True
) -> Tuple[NDArray[np.float64], int]:
    """
    Loads an audio file as a float64 sample buffer.

    Args:
        file_path: Path of the audio file.
        sr: Target sampling rate. None keeps the native rate.
        mono: Downmix to one channel by averaging (the time scaler is mono only).

    Returns:
        A tuple ``(samples, sample_rate)``. ``samples`` has shape
        ``(n_samples,)`` when ``mono`` is True.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the path is not a regular file or has an unsupported extension.
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Audio input file not found: {file_path}")
    if not file_path.is_file():
        raise ValueError(f"Input path is not a file: {file_path}")
    ext = file_path.suffix.lower()
    if ext not in SUPPORTED_READ_EXTENSIONS:
        raise ValueError(f"Unsupported audio input extension: '{ext}'.")

    logger.info(f"Loading audio from: {file_path} (sr={sr}, mono={mono})")
    try:
        data, sample_rate = librosa.load(file_path, sr=sr, mono=mono)
    except Exception as e:
        logger.error(f"Error loading audio file {file_path}: {e}")
        raise

    data = data.astype(np.float64, copy=False)
    logger.debug(f"Audio loaded. Shape: {data.shape}, SR: {sample_rate}")
    return data, int(sample_rate)


def save_audio(
    data: NDArray[np.float64],
    sr: int,
    output_path: Path,
    subtype: Optional[str] = 'PCM_16'
):
    """
    Writes a mono sample buffer to disk; the format follows the extension.

    For PCM subtypes, samples outside ``[-1.0, 1.0]`` are clipped (with a
    warning) to avoid integer wrap-around.

    Raises:
        ValueError: If the extension is unsupported or the data is not 1D.
    """
    output_path = Path(output_path)
    ext = output_path.suffix.lower()
    if ext not in SUPPORTED_WRITE_EXTENSIONS:
        raise ValueError(f"Unsupported audio output extension: '{ext}'.")
    data = np.asarray(data, dtype=np.float64)
    if data.ndim != 1:
        raise ValueError(f"Output audio must be 1D (mono), got shape {data.shape}")

    if subtype and 'PCM' in subtype and data.size:
        peak = float(np.max(np.abs(data)))
        if peak > 1.0:
            logger.warning(f"Audio peak {peak:.4f} exceeds 1.0 for PCM subtype '{subtype}'; clipping.")
            data = np.clip(data, -1.0, 1.0)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Saving audio to: {output_path} (sr={sr}, subtype={subtype})")
    try:
        sf.write(output_path, data, sr, subtype=subtype, format=ext[1:].upper())
    except Exception as e:
        logger.error(f"Error saving audio file {output_path}: {e}")
        raise
