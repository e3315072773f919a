import threading
import unittest

from app.services.like_registry import LikeRegistry


class LikeRegistryTest(unittest.TestCase):
    def test_unknown_symbol_has_zero_likes(self):
        self.assertEqual(LikeRegistry().count("AAPL"), 0)

    def test_register_like_is_idempotent_per_identity(self):
        registry = LikeRegistry()

        self.assertTrue(registry.register_like("AAPL", "id-1"))
        self.assertEqual(registry.count("AAPL"), 1)
        self.assertFalse(registry.register_like("AAPL", "id-1"))
        self.assertEqual(registry.count("AAPL"), 1)

    def test_symbol_case_maps_to_same_entry(self):
        registry = LikeRegistry()
        registry.register_like("aapl", "id-1")

        self.assertFalse(registry.register_like("AAPL", "id-1"))
        registry.register_like("Aapl", "id-2")
        self.assertEqual(registry.count("aApL"), 2)

    def test_symbols_are_independent(self):
        registry = LikeRegistry()
        registry.register_like("GOOG", "id-1")
        registry.register_like("GOOG", "id-2")
        registry.register_like("MSFT", "id-1")

        self.assertEqual(registry.count("GOOG"), 2)
        self.assertEqual(registry.count("MSFT"), 1)

    def test_concurrent_likes_from_many_identities(self):
        registry = LikeRegistry()
        results = []
        lock = threading.Lock()

        def like(identity: str) -> None:
            created = registry.register_like("TSLA", identity)
            with lock:
                results.append(created)

        threads = [threading.Thread(target=like, args=(f"id-{i % 50}",)) for i in range(200)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(registry.count("TSLA"), 50)
        self.assertEqual(results.count(True), 50)
        self.assertEqual(results.count(False), 150)

    def test_metrics(self):
        registry = LikeRegistry()
        registry.register_like("GOOG", "id-1")
        registry.register_like("GOOG", "id-1")
        registry.register_like("MSFT", "id-2")

        self.assertEqual(
            registry.metrics(),
            {"liked_symbols": 2, "total_likes": 2, "registered_likes": 2, "duplicate_likes": 1},
        )


if __name__ == "__main__":
    unittest.main()
