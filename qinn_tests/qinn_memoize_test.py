import asyncio
import suite
from qinn import Q, from_range, from_async_iterable, Capability, ModeMismatchError
from dgen import from_schema

test = suite.test
assert_that = suite.assert_that
raises = suite.raises

order_schema = {
    'customer': {'_qen_provider': 'choice', 'from': ['acme', 'globex', 'initech', 'umbrella']},
    'amount': ('pyint', {'min_value': 1, 'max_value': 500}),
}


class _Counter:
    """wraps a callable and counts invocations"""
    def __init__(self, func):
        self.func = func
        self.calls = 0

    def __call__(self, *args):
        self.calls += 1
        return self.func(*args)


async def _agen(items):
    for item in items:
        yield item


# --- sync memoize ---

@test("memoize computes once per distinct key")
def test_memoize_basic():
    square = _Counter(lambda n: n * n)
    result = Q([1, 2, 3, 1, 2, 3]).util.memoize(square).to.list()
    assert_that(result == [1, 4, 9, 1, 4, 9], "output should follow input order")
    assert_that(square.calls == 3, f"square should run three times, ran {square.calls}")


@test("memoize cache survives repeated traversals")
def test_memoize_repeated_traversal():
    double = _Counter(lambda n: n * 2)
    memoized = Q([1, 2, 3]).util.memoize(double)
    first = memoized.to.list()
    second = memoized.to.list()
    assert_that(first == second == [2, 4, 6], "both traversals should agree")
    assert_that(double.calls == 3, f"second traversal should be served from cache, calls={double.calls}")


@test("separate memoize calls own separate caches")
def test_memoize_separate_caches():
    double = _Counter(lambda n: n * 2)
    source = Q([1, 2])
    source.util.memoize(double).to.list()
    source.util.memoize(double).to.list()
    assert_that(double.calls == 4, "each memoized enumerable has its own cache")


@test("memoize is lazy")
def test_memoize_lazy():
    fn = _Counter(lambda n: n)
    memoized = from_range(0, 5).util.memoize(fn)
    assert_that(fn.calls == 0, "nothing runs before a pull")
    memoized.take(2).to.list()
    assert_that(fn.calls == 2, "only pulled elements are computed")


@test("memoize default key treats structurally equal dicts as one key")
def test_memoize_default_key():
    describe = _Counter(lambda p: f"{p['name']}:{p['age']}")
    data = Q([{'name': 'ana', 'age': 3}, {'age': 3, 'name': 'ana'}, {'name': 'bo', 'age': 4}])
    result = data.util.memoize(describe).to.list()
    assert_that(result == ['ana:3', 'ana:3', 'bo:4'], "output per occurrence")
    assert_that(describe.calls == 2, f"key order should not matter, calls={describe.calls}")


@test("memoize default key keeps booleans apart from equal integers")
def test_memoize_default_key_types():
    show = _Counter(repr)
    result = Q([1, True, 0, False, 1.0, 1, True]).util.memoize(show).to.list()
    assert_that(result == ['1', 'True', '0', 'False', '1.0', '1', 'True'], f"each type keeps its own result, got {result}")
    assert_that(show.calls == 5, f"one call per (type, value), calls={show.calls}")


@test("memoize with an explicit key selector")
def test_memoize_key_selector():
    orders = from_schema(order_schema, seed=9).take(40)
    lookup = _Counter(lambda o: o['customer'].upper())
    result = orders.util.memoize(lookup, lambda o: o['customer']).to.list()
    distinct_customers = orders.select(lambda o: o['customer']).set.distinct().to.count()
    assert_that(len(result) == 40, "one output per input")
    assert_that(lookup.calls == distinct_customers, f"one call per customer, got {lookup.calls}")


@test("memoize keeps the sync capability of its source")
def test_memoize_capability():
    assert_that(Q([1]).util.memoize(lambda x: x).capability is Capability.SYNC, "sync source stays sync")


@test("memoize over an async source is consumed asynchronously")
async def test_memoize_over_async_source():
    square = _Counter(lambda n: n * n)
    memoized = from_async_iterable(_agen([2, 2, 3])).util.memoize(square)
    assert_that(await memoized.to.list_async() == [4, 4, 9], "values in order")
    assert_that(square.calls == 2, "one call per key")


# --- async memoize ---

@test("memoize_async computes once per distinct key")
async def test_memoize_async_basic():
    calls = []

    async def fetch(n):
        calls.append(n)
        await asyncio.sleep(0)
        return {'id': n, 'data': f"data-{n}"}

    memoized = Q([1, 2, 1, 3, 2]).util.memoize_async(fetch)
    result = await memoized.to.list_async()
    assert_that([r['id'] for r in result] == [1, 2, 1, 3, 2], "output should follow input order")
    assert_that(calls == [1, 2, 3], f"fetch should run once per id, got {calls}")

    again = await memoized.to.list_async()
    assert_that(again == result, "second traversal should reuse cached values")
    assert_that(calls == [1, 2, 3], "second traversal should not call fetch")


@test("memoize_async returns an async-only enumerable")
def test_memoize_async_is_async_only():
    memoized = Q([1]).util.memoize_async(lambda x: x)
    assert_that(memoized.capability is Capability.ASYNC, "should be async")
    with raises(ModeMismatchError):
        memoized.to.list()


@test("memoize_async accepts a plain function")
async def test_memoize_async_plain_function():
    double = _Counter(lambda n: n * 2)
    result = await Q([1, 1, 2]).util.memoize_async(double).to.list_async()
    assert_that(result == [2, 2, 4], "values in order")
    assert_that(double.calls == 2, "one call per key")


@test("concurrent pulls for a pending key share one computation")
async def test_memoize_async_interleaved():
    calls = []
    release = asyncio.Event()

    async def slow(n):
        calls.append(n)
        await release.wait()
        return n * 10

    memoized = Q([7]).util.memoize_async(slow)
    first = asyncio.ensure_future(memoized.to.list_async())
    second = asyncio.ensure_future(memoized.to.list_async())

    # let both consumers reach the pending computation before it resolves
    for _ in range(5):
        await asyncio.sleep(0)
    assert_that(calls == [7], f"second pull should find the in-flight task, calls={calls}")

    release.set()
    results = await asyncio.gather(first, second)
    assert_that(results == [[70], [70]], "both consumers receive the shared value")
    assert_that(calls == [7], "the wrapped function ran exactly once")


@test("interleaved traversals over many duplicate keys stay at one call per key")
async def test_memoize_async_gather():
    calls = []

    async def work(n):
        calls.append(n)
        await asyncio.sleep(0.001 * n)
        return -n

    memoized = Q([3, 1, 2, 3, 1, 2]).util.memoize_async(work)
    results = await asyncio.gather(*(memoized.to.list_async() for _ in range(4)))
    assert_that(all(r == [-3, -1, -2, -3, -1, -2] for r in results), "every consumer sees input order")
    assert_that(sorted(calls) == [1, 2, 3], f"one call per key across all consumers, got {calls}")


@test("a cancelled consumer does not cancel the shared computation")
async def test_memoize_async_cancellation():
    release = asyncio.Event()

    async def slow(n):
        await release.wait()
        return n + 1

    memoized = Q([1]).util.memoize_async(slow)
    doomed = asyncio.ensure_future(memoized.to.list_async())
    survivor = asyncio.ensure_future(memoized.to.list_async())
    for _ in range(5):
        await asyncio.sleep(0)

    doomed.cancel()
    await asyncio.sleep(0)
    release.set()
    assert_that(await survivor == [2], "the other consumer still gets the value")


@test("a failed computation is cached and re-raised without another call")
async def test_memoize_async_failure():
    calls = []

    async def flaky(n):
        calls.append(n)
        raise RuntimeError(f"failed for {n}")

    memoized = Q([1]).util.memoize_async(flaky)
    for _ in range(2):
        with raises(RuntimeError):
            await memoized.to.list_async()
    assert_that(calls == [1], f"the failure should be cached, calls={calls}")


if __name__ == "__main__":
    suite.run(title="qinn memoize test")
