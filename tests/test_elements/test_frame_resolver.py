import asyncio

import pytest

from webhandle.elements.frame_resolver import FrameMatch, find_owner_frame
from webhandle.exceptions import CancellationError, HandleReleaseError, ProtocolError
from webhandle.scope import ExecutionScope


class FakeFrame:
    """A page in a fake frame tree; resolves the node only if it owns it."""

    def __init__(self, name, children=(), owns_node=False, resolve_error=None, hang=False):
        self.name = name
        self.children = list(children)
        self.owns_node = owns_node
        self.resolve_error = resolve_error
        self.hang = hang
        self.release_error = None
        self.release_delay = 0
        self.log = None

    def attach(self, log):
        self.log = log
        for child in self.children:
            child.attach(log)
        return self

    async def elements(self, selector):
        assert selector == 'iframe'
        return [FakeIframe(child, self.log) for child in self.children]

    async def resolve_node(self, node_id):
        self.log.append(('resolve', self.name))
        if self.hang:
            await asyncio.sleep(30)
        if self.resolve_error is not None:
            raise self.resolve_error
        return f'obj-{node_id}@{self.name}' if self.owns_node else None

    def __repr__(self):
        return f'<FakeFrame {self.name}>'


class FakeIframe:
    """An iframe handle whose release is recorded."""

    def __init__(self, frame, log):
        self._frame = frame
        self.log = log

    def frame(self):
        return self._frame

    async def release(self):
        if self._frame.release_delay:
            await asyncio.sleep(self._frame.release_delay)
        self.log.append(('release', self._frame.name))
        if self._frame.release_error is not None:
            raise self._frame.release_error


def tree(*children, log):
    return FakeFrame('root', children).attach(log)


def released(log):
    return sorted(name for action, name in log if action == 'release')


def resolved(log):
    return [name for action, name in log if action == 'resolve']


# ── Search order ──────────────────────────────────────────────────────


class TestSearchOrder:
    """Test the depth-first walk."""

    @pytest.mark.asyncio
    async def test_no_iframes(self):
        log = []

        assert await find_owner_frame(tree(log=log), 5) is None
        assert log == []

    @pytest.mark.asyncio
    async def test_depth_first_before_siblings(self):
        log = []
        root = tree(
            FakeFrame('a', [FakeFrame('a1'), FakeFrame('a2')]),
            FakeFrame('b', [FakeFrame('b1', owns_node=True)]),
            log=log,
        )

        match = await find_owner_frame(root, 5)

        assert resolved(log) == ['a', 'a1', 'a2', 'b', 'b1']
        assert isinstance(match, FrameMatch)
        assert match.page.name == 'b1'
        assert match.object_id == 'obj-5@b1'

    @pytest.mark.asyncio
    async def test_first_match_stops_walk(self):
        log = []
        root = tree(
            FakeFrame('a', [FakeFrame('a1', owns_node=True)]),
            FakeFrame('b', owns_node=True),
            log=log,
        )

        match = await find_owner_frame(root, 5)

        assert match.page.name == 'a1'
        assert 'b' not in resolved(log)

    @pytest.mark.asyncio
    async def test_not_found(self):
        log = []
        root = tree(FakeFrame('a', [FakeFrame('a1')]), FakeFrame('b'), log=log)

        assert await find_owner_frame(root, 5) is None
        assert resolved(log) == ['a', 'a1', 'b']


# ── Handle release ────────────────────────────────────────────────────


class TestHandleRelease:
    """Test that transient iframe handles are released."""

    @pytest.mark.asyncio
    async def test_all_but_match_released(self):
        log = []
        root = tree(FakeFrame('a'), FakeFrame('b', [FakeFrame('b1', owns_node=True)]), log=log)

        match = await find_owner_frame(root, 5)

        assert match.page.name == 'b1'
        assert released(log) == ['a', 'b']
        assert match.iframe.frame() is match.page

    @pytest.mark.asyncio
    async def test_unvisited_siblings_released(self):
        log = []
        root = tree(
            FakeFrame('a', owns_node=True),
            FakeFrame('b', [FakeFrame('b1')]),
            FakeFrame('c'),
            log=log,
        )

        await find_owner_frame(root, 5)

        assert released(log) == ['b', 'c']

    @pytest.mark.asyncio
    async def test_everything_released_when_not_found(self):
        log = []
        root = tree(FakeFrame('a', [FakeFrame('a1')]), FakeFrame('b'), log=log)

        await find_owner_frame(root, 5)

        assert released(log) == ['a', 'a1', 'b']

    @pytest.mark.asyncio
    async def test_released_when_resolution_fails(self):
        log = []
        failure = ProtocolError('Target closed')
        root = tree(
            FakeFrame('a', [FakeFrame('a1', resolve_error=failure)]),
            FakeFrame('b'),
            log=log,
        )

        with pytest.raises(ProtocolError, match='Target closed'):
            await find_owner_frame(root, 5)

        assert released(log) == ['a', 'a1', 'b']

    @pytest.mark.asyncio
    async def test_release_failures_are_combined(self):
        log = []
        broken = FakeFrame('a')
        broken.release_error = ProtocolError('Could not find object with given id')
        root = tree(broken, FakeFrame('b'), log=log)

        with pytest.raises(HandleReleaseError) as exc_info:
            await find_owner_frame(root, 5)

        assert released(log) == ['a', 'b']
        assert len(exc_info.value.errors) == 1
        assert exc_info.value.original is None

    @pytest.mark.asyncio
    async def test_release_failure_keeps_original_error(self):
        log = []
        failure = ProtocolError('Target closed')
        broken = FakeFrame('a', resolve_error=failure)
        broken.release_error = ProtocolError('Could not find object with given id')
        root = tree(broken, log=log)

        with pytest.raises(HandleReleaseError) as exc_info:
            await find_owner_frame(root, 5)

        assert exc_info.value.original is failure
        assert exc_info.value.__cause__ is failure


# ── Cancellation ──────────────────────────────────────────────────────


class TestCancelledWalk:
    """Test that cancelling the caller's scope still releases every handle first."""

    @pytest.mark.asyncio
    async def test_releases_finish_before_cancellation_surfaces(self):
        log = []
        a = FakeFrame('a', hang=True)
        b = FakeFrame('b')
        a.release_delay = b.release_delay = 0.05
        root = tree(a, b, log=log)
        scope = ExecutionScope()

        task = asyncio.create_task(scope.run(find_owner_frame(root, 5)))
        await asyncio.sleep(0.01)
        scope.cancel('element released')

        with pytest.raises(CancellationError, match='element released'):
            await task
        assert released(log) == ['a', 'b']

    @pytest.mark.asyncio
    async def test_release_failure_during_cancellation_is_reported(self):
        log = []
        a = FakeFrame('a', hang=True)
        a.release_error = ProtocolError('Could not find object with given id')
        root = tree(a, log=log)
        scope = ExecutionScope(timeout=0.01)

        with pytest.raises(CancellationError, match='deadline exceeded') as exc_info:
            await scope.run(find_owner_frame(root, 5))

        assert released(log) == ['a']
        assert isinstance(exc_info.value.__cause__, HandleReleaseError)
