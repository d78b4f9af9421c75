import pytest # type: ignore
import numpy as np # type: ignore
import cardinal
from cardinal import (
    HLLConfig,
    HyperLogLog,
    InvalidPrecisionError,
    NullEstimatorError,
    PrecisionMismatchError,
    UninitializedError,
    describe_error,
    estimate,
    initialize,
    insert,
    merge,
    release,
    xxhash_function,
)

@pytest.mark.quick
class TestInitialize:
    def test_defaults(self):
        sketch = initialize()
        assert isinstance(sketch, HyperLogLog)
        assert sketch.precision == 10
        assert sketch.hash_function is cardinal.hash_string
        assert len(sketch.registers) == 1024

    def test_config(self):
        sketch = initialize(HLLConfig(precision=12))
        assert sketch.num_registers == 4096

    def test_overrides(self):
        config = HLLConfig(precision=12)
        sketch = initialize(config, precision=5)
        assert sketch.precision == 5
        assert config.precision == 12

    def test_hash_width_mismatch(self):
        with pytest.raises(ValueError, match="hash_size"):
            initialize(HLLConfig(precision=10, hash_size=64))

    @pytest.mark.parametrize("precision", [0, 3, 17, 32])
    def test_invalid_precision(self, precision):
        with pytest.raises(InvalidPrecisionError) as excinfo:
            initialize(precision=precision)
        assert describe_error(excinfo.value) == "HLL_ERROR_INVALID_PRECISION"


@pytest.mark.quick
class TestNullEstimator:
    def test_insert(self):
        with pytest.raises(NullEstimatorError):
            insert(None, "x")

    def test_estimate(self):
        with pytest.raises(NullEstimatorError):
            estimate(None)

    def test_release(self):
        with pytest.raises(NullEstimatorError):
            release(None)

    def test_merge_either_side(self):
        sketch = initialize(precision=4)
        with pytest.raises(NullEstimatorError):
            merge(None, sketch)
        with pytest.raises(NullEstimatorError):
            merge(sketch, None)


@pytest.mark.quick
class TestLifecycle:
    def test_full_cycle(self):
        hash_function = xxhash_function(seed=4)
        a = initialize(precision=10, hash_function=hash_function)
        b = initialize(precision=10, hash_function=hash_function)
        for i in range(1000):
            insert(a, f"a{i}")
            insert(b, f"b{i}", None)
        assert estimate(a) == estimate(a)
        merge(a, b)
        assert abs(estimate(a) - 2000) / 2000 < 0.15
        release(a)
        release(b)
        with pytest.raises(UninitializedError) as excinfo:
            estimate(a)
        assert describe_error(excinfo.value) == "HLL_ERROR_HLL_UNINITIALIZED"

    def test_insert_length(self):
        a = initialize(precision=8)
        b = initialize(precision=8)
        insert(a, "abcdef", 2)
        insert(b, "ab")
        assert np.array_equal(a.registers, b.registers)

    def test_strict_merge(self):
        with pytest.raises(PrecisionMismatchError):
            merge(initialize(precision=4), initialize(precision=6), strict=True)

    def test_lossy_merge_warns(self):
        with pytest.warns(RuntimeWarning):
            merge(initialize(precision=4), initialize(precision=6))
