class InvalidLength(ValueError):
    """Raised when ``length`` is assigned a negative or non-whole number."""

    def __init__(self, length: object) -> None:
        super().__init__(f"length must be a non-negative integer, got {length!r}")
        self.length = length
