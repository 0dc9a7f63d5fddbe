"""
Transition errors

Binding-time errors (NoSuchPropertyError, UnsupportedTypeError,
NotAccessibleError, InvalidStateError) are raised synchronously from
Transition.add() / Transition.go(). PropertyWriteError and
TimingCurveError are the fatal runtime failures of a running transition.
"""

from typing import Any, Optional


class TransitionError(Exception):
    """Base class for transition engine errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NoSuchPropertyError(TransitionError):
    """Target has no property with the given name"""
    def __init__(self, target: Any, property_name: str):
        super().__init__(
            code="NO_SUCH_PROPERTY",
            message=f"Object {target!r} does not have the property '{property_name}'",
            details={"target_type": type(target).__name__, "property": property_name}
        )


class UnsupportedTypeError(TransitionError):
    """No interpolator registered for the value type"""
    def __init__(self, value_type: type):
        name = getattr(value_type, "__name__", repr(value_type))
        super().__init__(
            code="UNSUPPORTED_TYPE",
            message=f"Transitions do not handle values of type '{name}'",
            details={"value_type": name}
        )


class NotAccessibleError(TransitionError):
    """Property exists but is not both readable and writable"""
    def __init__(self, target: Any, property_name: str, readable: bool, writable: bool):
        super().__init__(
            code="NOT_ACCESSIBLE",
            message=f"Property '{property_name}' is not both readable and writable",
            details={
                "target_type": type(target).__name__,
                "property": property_name,
                "readable": readable,
                "writable": writable,
            }
        )


class InvalidStateError(TransitionError):
    """Operation not allowed in the transition's current state"""
    def __init__(self, operation: str, state: str):
        super().__init__(
            code="INVALID_STATE",
            message=f"Cannot {operation} a transition in state {state}",
            details={"operation": operation, "state": state}
        )


class PropertyWriteError(TransitionError):
    """Writing an interpolated value to a target failed"""
    def __init__(self, target: Any, property_name: str, error: BaseException):
        super().__init__(
            code="PROPERTY_WRITE_FAILED",
            message=f"Failed to set '{property_name}' on {target!r}: {error}",
            details={
                "target_type": type(target).__name__,
                "property": property_name,
                "error_type": type(error).__name__,
            }
        )


class TimingCurveError(TransitionError):
    """The timing curve or the elapsed-time source failed during a tick"""
    def __init__(self, curve: Any, error: BaseException):
        super().__init__(
            code="TIMING_FAILED",
            message=f"Timing curve {curve!r} failed: {error}",
            details={
                "curve": type(curve).__name__,
                "error_type": type(error).__name__,
            }
        )
