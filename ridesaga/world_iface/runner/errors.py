class WorldGenError(Exception):
    pass
class InvalidDimensions(WorldGenError, ValueError):
    def __init__(self, width, height):
        super().__init__(f"World dimensions must be positive integers, got {width}x{height}")
        self.width = width
        self.height = height
class ChecksumMismatch(WorldGenError):
    def __init__(self, artifact: str, expected: str, actual: str):
        super().__init__(f"Checksum mismatch for {artifact}: expected {expected}, got {actual}")
        self.artifact = artifact
