import enum


class Status(enum.Enum):
    SUCCESS = "00"
    FAILURE = "01"
    ORDER_NOT_FOUND = "02"
    INVALID_SIGNATURE = "03"
    AMOUNT_MISMATCH = "04"
    PAYLOAD_MISMATCH = "05"
    UNKNOWN_ERROR = "99"
