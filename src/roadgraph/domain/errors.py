from enum import Enum


class PointNotInGraph(KeyError):
    def __init__(self, point):
        super().__init__(point)
        self.point = point

    def __str__(self) -> str:
        return f"point not in graph: {self.point!r}"


class RejectReason(str, Enum):
    MISSING_FIELD = "missing_field"
    INVALID_LENGTH = "invalid_length"  # not a real number, negative, NaN or infinite
    UNKNOWN_ENDPOINT = "unknown_endpoint"
    DUPLICATE = "duplicate"
