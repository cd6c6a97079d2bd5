# hecto/integrations/FileBridge.py
"""FileBridge Module
===================
The thin file-system collaborator used by `Document`.

- ``read_text`` loads a whole file, detecting its encoding with `chardet`
  (a confident guess first, then UTF-8) and decoding strictly. Content that
  cannot be decoded is rejected here with `UnicodeDecodeError`, so the buffer
  only ever holds valid text.
- ``write_text`` writes each line followed by exactly one ``"\\n"``. Text the
  remembered encoding cannot represent is written as UTF-8 instead, and the
  bridge switches to UTF-8 for later writes.

`OSError` (missing file, directory, permissions) is logged and re-raised
unchanged; presenting it to the user is the caller's job.
"""

import logging
import os
from typing import Iterable, Optional

import chardet


class FileBridge:
    """Reads and writes whole text files.

    Attributes:
        encoding (str): Encoding used by the last successful read; also the
            default for writes.
        confidence_threshold (float): Minimum chardet confidence for its
            guess to be tried before UTF-8.
    """

    SAMPLE_SIZE = 1024 * 20

    def __init__(self, encoding: str = "utf-8", confidence_threshold: float = 0.75) -> None:
        self.encoding = encoding
        self.confidence_threshold = confidence_threshold

    def detect_encodings(self, raw: bytes) -> list[str]:
        """Ordered, de-duplicated list of encodings worth trying for ``raw``."""
        candidates: list[str] = []
        if raw:
            result = chardet.detect(raw[: self.SAMPLE_SIZE])
            guess = result.get("encoding")
            confidence = result.get("confidence") or 0.0
            logging.debug(
                f"Chardet detected encoding '{guess}' with confidence {confidence:.2f}."
            )
            if guess and confidence >= self.confidence_threshold:
                # Plain ASCII is read (and later written) as UTF-8.
                guess = guess.lower()
                candidates.append("utf-8" if guess == "ascii" else guess)
        if "utf-8" not in candidates:
            candidates.append("utf-8")
        return candidates

    def read_text(self, path: str) -> str:
        """Returns the full decoded content of ``path``.

        Raises:
            OSError: The file cannot be opened or read.
            UnicodeDecodeError: No candidate encoding decodes the content.
        """
        try:
            with open(path, "rb") as f_binary:
                raw = f_binary.read()
        except OSError as e:
            logging.error(f"Failed to read file '{path}': {e}", exc_info=True)
            raise

        last_error: Optional[UnicodeDecodeError] = None
        for encoding in self.detect_encodings(raw):
            try:
                text = raw.decode(encoding)
            except UnicodeDecodeError as e:
                logging.warning(f"Failed to decode '{path}' as '{encoding}': {e}")
                last_error = e
                continue
            except LookupError:
                logging.warning(f"Unknown encoding '{encoding}' suggested for '{path}'.")
                continue
            self.encoding = encoding
            logging.info(f"Read '{path}' using encoding '{encoding}'.")
            return text

        logging.error(f"All attempts to decode '{path}' failed.")
        if last_error is None:
            last_error = UnicodeDecodeError("utf-8", raw, 0, len(raw), "undecodable content")
        raise last_error

    def encode_text(self, text: str, encoding: str) -> bytes:
        """Encodes ``text`` as ``encoding``, falling back to UTF-8.

        On fallback ``self.encoding`` becomes ``"utf-8"`` so the file is read
        and written consistently from then on.
        """
        try:
            return text.encode(encoding)
        except (UnicodeEncodeError, LookupError) as e:
            logging.warning(
                f"Cannot encode buffer as '{encoding}' ({e}); saving as UTF-8 instead."
            )
            self.encoding = "utf-8"
            return text.encode("utf-8")

    def write_text(
        self, path: str, lines: Iterable[str], encoding: Optional[str] = None
    ) -> None:
        """Writes ``lines`` to ``path``, each followed by one line terminator.

        The whole content is encoded before the file is opened, so a failure
        never leaves ``path`` truncated.

        Raises:
            OSError: The file cannot be created or written.
        """
        encoding = encoding or self.encoding
        text = "".join(f"{line}\n" for line in lines)
        data = self.encode_text(text, encoding)
        try:
            with open(path, "wb") as f_binary:
                f_binary.write(data)
        except OSError as e:
            logging.error(f"Failed to write file '{path}': {e}", exc_info=True)
            raise
        logging.debug(f"Successfully wrote to '{os.path.abspath(path)}'")
