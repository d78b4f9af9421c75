import pytest # type: ignore
from cardinal.lib.errors import (
    ErrorKind,
    HLLError,
    NullEstimatorError,
    InvalidPrecisionError,
    UninitializedError,
    AllocationFailureError,
    PrecisionMismatchError,
    describe_error,
)

@pytest.mark.quick
class TestDescribeError:
    @pytest.mark.parametrize("kind,label", [
        (ErrorKind.NULL_ESTIMATOR, "HLL_ERROR_HLL_NULL"),
        (ErrorKind.INVALID_PRECISION, "HLL_ERROR_INVALID_PRECISION"),
        (ErrorKind.UNINITIALIZED, "HLL_ERROR_HLL_UNINITIALIZED"),
        (ErrorKind.ALLOCATION_FAILURE, "HLL_ERROR_ALLOCATING_MEMORY"),
        (ErrorKind.PRECISION_MISMATCH, "HLL_ERROR_PRECISION_MISMATCH"),
    ])
    def test_labels(self, kind, label):
        assert describe_error(kind) == label

    def test_ok(self):
        assert describe_error(None) == "HLL_OK"

    def test_unknown(self):
        assert describe_error("bogus") == "HLL_ERROR_UNKNOWN"
        assert describe_error(ValueError("x")) == "HLL_ERROR_UNKNOWN"

    @pytest.mark.parametrize("error_cls,kind", [
        (NullEstimatorError, ErrorKind.NULL_ESTIMATOR),
        (InvalidPrecisionError, ErrorKind.INVALID_PRECISION),
        (UninitializedError, ErrorKind.UNINITIALIZED),
        (AllocationFailureError, ErrorKind.ALLOCATION_FAILURE),
        (PrecisionMismatchError, ErrorKind.PRECISION_MISMATCH),
    ])
    def test_instances(self, error_cls, kind):
        error = error_cls("details")
        assert isinstance(error, HLLError)
        assert error.kind is kind
        assert describe_error(error) == kind.value
        assert str(error) == "details"

    def test_default_message_is_label(self):
        assert str(UninitializedError()) == "HLL_ERROR_HLL_UNINITIALIZED"


@pytest.mark.quick
def test_builtin_bases():
    assert issubclass(NullEstimatorError, TypeError)
    assert issubclass(InvalidPrecisionError, ValueError)
    assert issubclass(UninitializedError, RuntimeError)
    assert issubclass(AllocationFailureError, MemoryError)
    assert issubclass(PrecisionMismatchError, ValueError)
