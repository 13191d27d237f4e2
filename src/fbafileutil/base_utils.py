"""Base utility class providing core shared logic for all utility modules."""

import json
import logging
from typing import Any, Dict, List, Optional

from .errors import ArgumentShapeError


class BaseUtils:
    """Base class for the FBAFileUtil service classes.

    Provides logging, argument validation and call tracking shared by the
    conversion service and the clients it talks to.
    """

    def __init__(self, name="Unknown", log_level: str = "INFO", **kwargs: Any) -> None:
        """Initialize the base utility class."""
        self.logger = self._setup_logger(log_level)

        # Allow subclasses to pass additional initialization parameters
        for key, value in kwargs.items():
            setattr(self, key, value)

        self.name = name
        self.reset_attributes()

    def reset_attributes(self):
        self.method = None
        self.params = {}

    def initialize_call(
        self,
        method: str,
        params: Dict[str, Any],
        print_params: bool = False,
        no_print: Optional[List[str]] = None,
    ) -> None:
        """Record the method being called and optionally log its parameters."""
        if no_print is None:
            no_print = []
        self.method = method
        self.params = dict(params)
        if print_params:
            log_params = {k: v for k, v in self.params.items() if k not in no_print}
            self.log_info(f"{method}: {json.dumps(log_params, indent=2, default=str)}")

    def _setup_logger(self, log_level: str) -> logging.Logger:
        """Set up logging for the utility module."""
        logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )
        logger.setLevel(getattr(logging, log_level.upper()))

        # Only add handler if none exists to prevent duplicate logs
        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def log_info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def log_warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def log_error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def log_debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)

    def log_critical(self, message: str) -> None:
        """Log a critical message."""
        self.logger.critical(message)

    def check_single_param(self, method: str, args: tuple, expected: int = 1) -> Any:
        """Check the positional argument count of a generated API method.

        Every API method takes exactly one structure, except a few that take
        nothing at all.
        """
        if len(args) != expected:
            raise ArgumentShapeError(
                f"Invalid argument count for function {method} "
                f"(received {len(args)}, expecting {expected})",
                method_name=method,
            )
        if expected == 0:
            return None
        params = args[0]
        if not isinstance(params, dict):
            raise ArgumentShapeError(
                f"Invalid arguments passed to {method}:\n"
                f'\tInvalid type for argument "params" (value was "{params}")',
                method_name=method,
            )
        return params

    def validate_args(
        self,
        params: Dict[str, Any],
        required: List[str],
        defaults: Dict[str, Any],
        method: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Validate method arguments and apply defaults."""
        for item in required:
            if item not in params:
                raise ArgumentShapeError(
                    f"Required argument {item} is missing!", method_name=method
                )

        for key, value in defaults.items():
            if key not in params:
                params[key] = value

        return params
