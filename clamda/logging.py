from datetime import datetime, timezone
import inspect
import json
import logging
import logging.handlers
import pathlib
import sys
import traceback
from typing import Callable, Dict, List, Optional, Union


class ClamdaLogger:
    """Wraps a logging.Logger so that it's easy to use str.format syntax.

    The message is only formatted, and the calling frame only captured, when
    the wrapped logger is enabled for the level. Curried functions log on
    every invocation, so that check has to come first.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def debug(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            # https://stackoverflow.com/a/44164714/3455228
            caller = inspect.stack(0)[1]
            _log(self._logger.debug, format_string, caller, args, kwargs)

    def info(
        self, format_string: str, *args: object, **kwargs: object
    ) -> None:
        if self._logger.isEnabledFor(logging.INFO):
            caller = inspect.stack(0)[1]
            _log(self._logger.info, format_string, caller, args, kwargs)


def get_logger(name: str) -> ClamdaLogger:
    return ClamdaLogger(logging.getLogger(name))


class _LogRecordEncoder(json.JSONEncoder):
    """A JSON Encoder that supports logging.LogRecord objects."""

    def default(self, obj: object):
        if isinstance(obj, logging.LogRecord):
            caller = getattr(obj, 'caller', None)
            if caller is not None:
                path_name = caller.filename
                line_number = caller.lineno
                function_name = caller.function
                module = caller.frame.f_globals.get('__name__', obj.module)
            else:
                path_name = obj.pathname
                line_number = obj.lineno
                function_name = obj.funcName
                module = obj.module
            return {
                'name': obj.name,
                'message': obj.getMessage(),
                'level_name': obj.levelname,
                'path_name': path_name,
                'file_name': pathlib.Path(path_name).name,
                'module': module,
                'exception': (
                    traceback.format_exception(*obj.exc_info)
                    if obj.exc_info
                    else None
                ),
                'line_number': line_number,
                'function_name': function_name,
                'created': datetime.fromtimestamp(
                    obj.created, timezone.utc
                ).isoformat(),
                'thread': obj.thread,
                'thread_name': obj.threadName,
                'process_name': obj.processName,
                'process': obj.process,
            }
        return super().default(obj)


class _JSONFormatter(logging.Formatter):
    """A logging formatter for producing structured JSON logs."""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(record, cls=_LogRecordEncoder)


def configure(
    level: int = logging.DEBUG,
    path: Optional[Union[str, pathlib.Path]] = None,
    json_format: bool = False,
) -> logging.Handler:
    """Attach a handler to the clamda logger hierarchy and return it.

    The library itself never installs handlers. With `path`, records go to a
    rotating file as JSON; otherwise they go to stderr.
    """
    handler: logging.Handler
    if path is not None:
        handler = logging.handlers.RotatingFileHandler(
            path, maxBytes=1048576, backupCount=1
        )
        handler.setFormatter(_JSONFormatter())
    else:
        handler = logging.StreamHandler(sys.stderr)
        if json_format:
            handler.setFormatter(_JSONFormatter())
        else:
            handler.setFormatter(
                logging.Formatter('%(levelname)s:%(name)s:%(message)s')
            )
    logger = logging.getLogger('clamda')
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def _log(
    logging_method: Callable,
    format_string: str,
    caller: inspect.FrameInfo,
    args: List[object],
    kwargs: Dict[str, object],
) -> None:
    exc_info = None
    if 'exc_info' in kwargs:
        exc_info = kwargs['exc_info']
        del kwargs['exc_info']
    logging_method(
        _DelayedFormat(format_string, args, kwargs),
        exc_info=exc_info,
        extra={'caller': caller},
    )


class _DelayedFormat:
    def __init__(
        self, format_string: str, args: List[object], kwargs: Dict[str, object]
    ) -> None:
        self._format_string, self._args, self._kwargs = (
            format_string,
            args,
            kwargs,
        )

    def __str__(self) -> str:
        return self._format_string.format(*self._args, **self._kwargs)
