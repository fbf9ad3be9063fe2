# test/conftest.py
import pytest

from telemplot.core import Dataset, DatasetRegistry


class FakeHandle:
    """Records what the lifecycle manager asked the renderer to do."""

    def __init__(self, options, data, mount, sync):
        self.options = options
        self.data = data
        self.mount = mount
        self.sync = sync
        self.disposed = False
        self.cursor = None
        mount.content = self

    def set_cursor(self, x):
        self.cursor = x
        if self.sync is not None:
            self.sync.publish(self, x)

    def mirror_cursor(self, x):
        self.cursor = x

    def dispose(self):
        assert not self.disposed, "handle disposed twice"
        self.disposed = True
        if self.sync is not None:
            self.sync.leave(self)
        if self.mount.content is self:
            self.mount.content = None


class FakeRenderer:
    def __init__(self):
        self.constructed: list[FakeHandle] = []
        self.fail_titles: set[str] = set()

    def construct(self, options, data, mount, *, sync=None):
        if options.get("title") in self.fail_titles:
            raise ValueError("cannot draw this one")
        handle = FakeHandle(options, data, mount, sync)
        self.constructed.append(handle)
        return handle


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def steering_dataset():
    return Dataset(
        source_name="vehicleOutput.csv",
        columns=("TimeOfUpdate", "SteeringWheelAngle"),
        rows=(
            {"TimeOfUpdate": "0", "SteeringWheelAngle": "0.1"},
            {"TimeOfUpdate": "1", "SteeringWheelAngle": "0.2"},
        ),
    )


@pytest.fixture
def registry(steering_dataset):
    return DatasetRegistry().append(steering_dataset)
