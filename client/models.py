from dataclasses import dataclass
from enum import Enum


class ResultCode(int, Enum):
    SUCCESS = 0
    FAILED = 1


@dataclass(frozen=True)
class ServerLocation:
    host: str
    port: int

    def is_valid(self) -> bool:
        return bool(self.host) and 0 < self.port < 65536

    def __str__(self) -> str:
        return f"{self.host} {self.port}"
