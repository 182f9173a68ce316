"""Unit tests for application state transitions and the NewsReader controller."""

import threading
import unittest
from unittest.mock import MagicMock

from crypto_news import state as transitions
from crypto_news.errors import CancelledFetch, FetchError
from crypto_news.models import FilterMode
from crypto_news.reader import NewsReader
from crypto_news.state import AppState

from tests.test_pipeline import ids, make_article


class TestTransitions(unittest.TestCase):
    def test_initial_state_is_loading_with_fallback(self):
        articles = [make_article(1)]
        s = transitions.initial_state(articles, [3, 3, 5])
        self.assertTrue(s.loading)
        self.assertEqual(s.filter_mode, FilterMode.HOT)
        self.assertEqual(s.saved_ids, (3, 5))
        self.assertEqual(ids(s.articles), [1])

    def test_toggle_saved_twice_restores_set(self):
        s = AppState(saved_ids=(4, 9))
        once = transitions.toggle_saved(s, 7)
        self.assertEqual(set(once.saved_ids), {4, 7, 9})
        twice = transitions.toggle_saved(once, 7)
        self.assertEqual(set(twice.saved_ids), {4, 9})
        removed = transitions.toggle_saved(s, 4)
        self.assertEqual(removed.saved_ids, (9,))

    def test_transitions_do_not_mutate(self):
        s = AppState()
        transitions.set_filter(s, FilterMode.SAVED)
        transitions.set_query(s, "btc")
        transitions.toggle_theme(s)
        self.assertEqual(s, AppState())

    def test_fetch_lifecycle(self):
        s = transitions.start_fetch(AppState(error="old"))
        self.assertTrue(s.loading)
        self.assertIsNone(s.error)
        s = transitions.finish_fetch(s, [make_article(8)])
        s = transitions.end_fetch(s)
        self.assertFalse(s.loading)
        self.assertEqual(ids(s.articles), [8])

    def test_fail_fetch_substitutes_fallback(self):
        s = transitions.fail_fetch(
            AppState(articles=(make_article(8),)), "boom", [make_article(1)]
        )
        self.assertEqual(s.error, "boom")
        self.assertEqual(ids(s.articles), [1])
        self.assertIsNone(transitions.dismiss_error(s).error)

    def test_visible_articles_uses_state(self):
        s = AppState(
            articles=(make_article(1), make_article(2, hours_ago=1)),
            filter_mode=FilterMode.SAVED,
            saved_ids=(2,),
        )
        self.assertEqual(ids(transitions.visible_articles(s)), [2])


class TestNewsReader(unittest.TestCase):
    def setUp(self):
        self.source = MagicMock()
        self.store = MagicMock()
        self.store.load.return_value = [2]
        self.fallback = [make_article(1), make_article(2, hours_ago=1)]
        self.reader = NewsReader(self.source, self.store, fallback=self.fallback)

    def test_starts_with_fallback_and_saved_ids(self):
        self.assertTrue(self.reader.state.loading)
        self.assertEqual(self.reader.state.saved_ids, (2,))
        self.assertEqual(ids(self.reader.state.articles), [1, 2])

    def test_load_news_success(self):
        self.source.fetch.return_value = [make_article(10), make_article(11)]
        s = self.reader.load_news()
        self.assertFalse(s.loading)
        self.assertIsNone(s.error)
        self.assertEqual(ids(s.articles), [10, 11])

    def test_load_news_failure_uses_fallback(self):
        self.source.fetch.side_effect = FetchError("HTTP 500")
        s = self.reader.load_news()
        self.assertFalse(s.loading)
        self.assertEqual(s.error, "Live news unavailable (HTTP 500). Showing sample articles.")
        self.assertEqual(ids(s.articles), [1, 2])

    def test_load_news_empty_result(self):
        self.source.fetch.return_value = []
        s = self.reader.load_news()
        self.assertFalse(s.loading)
        self.assertEqual(s.error, transitions.EMPTY_RESULT_MESSAGE)
        self.assertEqual(ids(s.articles), [1, 2])

    def test_load_news_unexpected_error(self):
        self.source.fetch.side_effect = RuntimeError("bad state")
        s = self.reader.load_news()
        self.assertFalse(s.loading)
        self.assertIn("bad state", s.error)

    def test_cancelled_fetch_changes_nothing(self):
        self.source.fetch.return_value = [make_article(10)]
        self.reader.load_news()
        before = self.reader.state

        def superseded(token):
            token.cancel()
            raise CancelledFetch("superseded")

        self.source.fetch.side_effect = superseded
        self.reader.load_news()
        # Only the start_fetch transition applied; the result was discarded
        self.assertEqual(self.reader.state.articles, before.articles)
        self.assertIsNone(self.reader.state.error)

    def test_newer_fetch_supersedes_older(self):
        tokens = []

        def first_fetch(token):
            tokens.append(token)
            # A retry arrives while this request is in flight
            self.source.fetch.side_effect = second_fetch
            self.reader.load_news()
            return [make_article(100)]

        def second_fetch(token):
            tokens.append(token)
            return [make_article(200)]

        self.source.fetch.side_effect = first_fetch
        self.reader.load_news()

        self.assertTrue(tokens[0].cancelled)
        self.assertFalse(tokens[1].cancelled)
        self.assertEqual(ids(self.reader.state.articles), [200])
        self.assertFalse(self.reader.state.loading)

    def test_toggle_saved_persists_full_list(self):
        self.assertTrue(self.reader.toggle_saved(5))
        self.store.save.assert_called_with((2, 5))
        self.assertFalse(self.reader.toggle_saved(2))
        self.store.save.assert_called_with((5,))
        self.assertTrue(self.reader.is_saved(5))

    def test_concurrent_toggles_persist_latest_list(self):
        entered = threading.Event()
        release = threading.Event()
        persisted = []

        def slow_save(saved_ids):
            if not persisted:
                entered.set()
                release.wait(5)
            persisted.append(list(saved_ids))

        self.store.save.side_effect = slow_save
        first = threading.Thread(target=self.reader.toggle_saved, args=(5,))
        first.start()
        self.assertTrue(entered.wait(5))

        second = threading.Thread(target=self.reader.toggle_saved, args=(6,))
        second.start()
        # The second toggle waits for the first write to finish
        second.join(0.1)
        self.assertTrue(second.is_alive())
        self.assertEqual(self.reader.state.saved_ids, (2, 5))

        release.set()
        first.join(5)
        second.join(5)
        self.assertEqual(persisted, [[2, 5], [2, 5, 6]])
        self.assertEqual(persisted[-1], list(self.reader.state.saved_ids))

    def test_failed_save_rolls_back_toggle(self):
        self.store.save.side_effect = OSError("disk full")
        with self.assertLogs("crypto_news.reader", level="ERROR"):
            self.assertFalse(self.reader.toggle_saved(5))
            self.assertTrue(self.reader.toggle_saved(2))
        self.assertEqual(self.reader.state.saved_ids, (2,))

    def test_store_load_failure_defaults_to_empty(self):
        self.store.load.side_effect = OSError("disk gone")
        reader = NewsReader(self.source, self.store, fallback=self.fallback)
        self.assertEqual(reader.state.saved_ids, ())

    def test_view_controls(self):
        self.source.fetch.return_value = [
            make_article(10, "Bitcoin news"),
            make_article(11, "Ether news", hours_ago=1),
        ]
        self.reader.load_news()
        self.reader.set_filter(FilterMode.RISING)
        self.reader.set_query("bitcoin")
        self.assertEqual(ids(self.reader.visible()), [10])
        self.reader.toggle_theme()
        self.assertTrue(self.reader.state.dark_mode)
        self.assertIsNone(self.reader.article(99))
        self.assertEqual(self.reader.article(11)["title"], "Ether news")


if __name__ == "__main__":
    unittest.main()
