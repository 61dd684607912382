from api_responses.result import AppError, Err, ErrorKind, Ok, Result, STATUS_BY_KIND
from api_responses.formatter import envelope, respond


__all__ = [
    'AppError',
    'Err',
    'ErrorKind',
    'Ok',
    'Result',
    'STATUS_BY_KIND',
    'envelope',
    'respond',
]
