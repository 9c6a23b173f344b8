"""Maps character offsets in parsed text to UTF-8 byte offsets."""

from __future__ import annotations

from typing import Final


def _utf8_width(char: str) -> int:
    code_point = ord(char)
    if code_point < 0x80:
        return 1
    elif code_point < 0x800:
        return 2
    elif code_point < 0x10000:
        return 3
    return 4


class UTF8PositionMapper:
    """UTF-8 position mapping with a checkpoint system.

    Instead of storing a byte offset for every character, the mapper keeps
    one checkpoint every ``checkpoint_interval`` characters and walks forward
    from the nearest checkpoint. Error reporting is the only caller, so the
    mapper is built on demand after a parse has already failed.
    """

    def __init__(self, text: str, checkpoint_interval: int = 256) -> None:
        """Initialize position mapper with checkpoint system.

        Args:
            text: The decoded document the parser walked
            checkpoint_interval: Characters between checkpoints (default 256)
        """
        if checkpoint_interval <= 0:
            raise ValueError("checkpoint_interval must be positive")
        self.text: Final = text
        self.checkpoint_interval: Final = checkpoint_interval
        self._is_ascii_only: bool = text.isascii()
        # _char_checkpoints[k] == k * interval; _byte_checkpoints holds bytes
        self._char_checkpoints: list[int] = []
        self._byte_checkpoints: list[int] = []

        if not self._is_ascii_only:
            self._build_checkpoints()

    def _build_checkpoints(self) -> None:
        byte_pos = 0
        for char_pos, char in enumerate(self.text):
            if char_pos % self.checkpoint_interval == 0:
                self._char_checkpoints.append(char_pos)
                self._byte_checkpoints.append(byte_pos)
            byte_pos += _utf8_width(char)

        # Always store final position
        self._char_checkpoints.append(len(self.text))
        self._byte_checkpoints.append(byte_pos)

    def char_to_byte(self, char_pos: int) -> int:
        """Convert character position to byte position.

        Positions past the end of the text clamp to the total byte length.
        """
        if self._is_ascii_only:
            return min(char_pos, len(self.text))

        char_pos = min(char_pos, len(self.text))
        index = char_pos // self.checkpoint_interval
        byte_pos = self._byte_checkpoints[index]
        for i in range(self._char_checkpoints[index], char_pos):
            byte_pos += _utf8_width(self.text[i])
        return byte_pos
