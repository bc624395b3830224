# tests/test_locks.py
import asyncio
import unittest

from plant_health_api.shared.core.locks import KeyedLock


class TestKeyedLock(unittest.IsolatedAsyncioTestCase):
    async def test_same_key_is_serialized(self):
        locks = KeyedLock()
        order = []

        async def worker(name):
            async with locks.acquire("user-1"):
                order.append(f"{name}-start")
                await asyncio.sleep(0.01)
                order.append(f"{name}-end")

        await asyncio.gather(worker("a"), worker("b"))
        self.assertEqual(order, ["a-start", "a-end", "b-start", "b-end"])

    async def test_different_keys_run_concurrently(self):
        locks = KeyedLock()
        inside = asyncio.Event()

        async def first():
            async with locks.acquire("user-1"):
                await asyncio.wait_for(inside.wait(), timeout=1)

        async def second():
            async with locks.acquire("user-2"):
                inside.set()

        await asyncio.gather(first(), second())

    async def test_locks_are_released_when_unused(self):
        locks = KeyedLock()
        async with locks.acquire("user-1"):
            self.assertEqual(len(locks), 1)
        self.assertEqual(len(locks), 0)

        with self.assertRaises(RuntimeError):
            async with locks.acquire("user-1"):
                raise RuntimeError("boom")
        self.assertEqual(len(locks), 0)


if __name__ == "__main__":
    unittest.main()
