"""Shape checks for processor callbacks.

Processor callbacks are discovered by name, so their signatures are only known
at runtime. Before a callback is allowed into a dispatch list its parameter
annotations and (optionally) its return annotation are compared against the
event contract. Comparison is exact: ``bool`` does not satisfy ``int`` and a
subclass does not satisfy its base. A parameter without an annotation never
matches.
"""

import inspect
from typing import Any, Callable, Sequence

from loguru import logger

from .errors import SignatureMismatchError


class _AnyReturn:
    """Marker meaning "do not check the return annotation"."""

    def __repr__(self) -> str:
        return "ANY_RETURN"


ANY_RETURN: Any = _AnyReturn()

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _type_name(annotation: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return "<missing>"
    if isinstance(annotation, type) and not hasattr(annotation, "__origin__"):
        return annotation.__qualname__
    return repr(annotation)


def describe_callback(candidate: Callable[..., Any]) -> tuple[str, str]:
    """Return ``(module, qualname)`` for diagnostics."""
    module = getattr(candidate, "__module__", None) or "<unknown>"
    qualname = getattr(candidate, "__qualname__", None) or repr(candidate)
    return module, qualname


class SignatureValidator:
    """Checks callback shapes against an expected contract.

    Example:
        validator = SignatureValidator()
        validator.validate((str, str), AssetMoveResult, Processor.on_will_move_asset)
    """

    def check(
        self,
        expected_params: Sequence[Any],
        expected_return: Any,
        candidate: Callable[..., Any],
    ) -> None:
        """Raise if ``candidate`` does not match the contract.

        Args:
            expected_params: Exact annotation expected at each position
            expected_return: Exact return annotation, or ``ANY_RETURN``
            candidate: Callable to inspect (bound classmethods exclude ``cls``)

        Raises:
            SignatureMismatchError: On the first mismatch found
        """
        module, qualname = describe_callback(candidate)
        where = f"in {module}.{qualname}"

        try:
            signature = inspect.signature(candidate, eval_str=True)
        except (NameError, TypeError, ValueError, SyntaxError) as e:
            raise SignatureMismatchError(
                f"Could not resolve signature {where}: {e}", module, qualname
            ) from e

        parameters = list(signature.parameters.values())
        if len(parameters) != len(expected_params):
            raise SignatureMismatchError(
                f"Parameter count did not match. Expected: {len(expected_params)} "
                f"Got: {len(parameters)} {where}",
                module,
                qualname,
            )

        for index, (expected, parameter) in enumerate(zip(expected_params, parameters)):
            if parameter.kind not in _POSITIONAL_KINDS:
                raise SignatureMismatchError(
                    f"Parameter kind mismatch at parameter {index}. "
                    f"Expected: positional Got: {parameter.kind.description} {where}",
                    module,
                    qualname,
                )
            if parameter.annotation != expected:
                raise SignatureMismatchError(
                    f"Parameter type mismatch at parameter {index}. "
                    f"Expected: {_type_name(expected)} "
                    f"Got: {_type_name(parameter.annotation)} {where}",
                    module,
                    qualname,
                )

        if expected_return is not ANY_RETURN:
            actual_return = signature.return_annotation
            if actual_return is inspect.Signature.empty or actual_return != expected_return:
                raise SignatureMismatchError(
                    f"Return type mismatch. Expected: {_type_name(expected_return)} "
                    f"Got: {_type_name(actual_return)} {where}",
                    module,
                    qualname,
                )

    def validate(
        self,
        expected_params: Sequence[Any],
        expected_return: Any,
        candidate: Callable[..., Any],
    ) -> bool:
        """Like :meth:`check`, but log the mismatch and return ``False``."""
        try:
            self.check(expected_params, expected_return, candidate)
        except SignatureMismatchError as e:
            logger.warning("{}", e)
            return False
        return True
