from enum import Enum


class LogType(str, Enum):
    api_request = "api_request"


class Source(str, Enum):
    docs = "docs"
    other = "other"
    web = "web"
