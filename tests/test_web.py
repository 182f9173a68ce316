"""Unit tests for the Flask views."""

import datetime
import os
import unittest
from unittest.mock import MagicMock, patch

import requests

from crypto_news.config import get_settings
from crypto_news.errors import FetchError
from crypto_news.reader import NewsReader
from crypto_news.services.page_service import PageRenderer, is_web_url, time_ago
from crypto_news.web import create_app

from tests.test_pipeline import BASE_TIME, make_article


class TestTimeAgo(unittest.TestCase):
    def test_time_ago(self):
        now = BASE_TIME
        self.assertEqual(time_ago(now, now), "less than a minute ago")
        self.assertEqual(time_ago(now - datetime.timedelta(minutes=1), now), "1 minute ago")
        self.assertEqual(time_ago(now - datetime.timedelta(minutes=5), now), "5 minutes ago")
        self.assertEqual(time_ago(now - datetime.timedelta(hours=3), now), "3 hours ago")
        self.assertEqual(time_ago(now - datetime.timedelta(days=2), now), "2 days ago")


class TestOriginalLink(unittest.TestCase):
    def test_is_web_url(self):
        self.assertTrue(is_web_url("https://news.example.com/a"))
        self.assertTrue(is_web_url(" HTTP://news.example.com/a"))
        self.assertFalse(is_web_url("javascript:alert(1)"))
        self.assertFalse(is_web_url("data:text/html,hi"))
        self.assertFalse(is_web_url(""))

    def test_detail_hides_link_for_unsafe_scheme(self):
        renderer = PageRenderer(now=BASE_TIME)
        article = make_article(20, "Odd link")
        html = renderer.render_detail(article, [], saved=False)
        self.assertIn("Read original", html)

        article["url"] = "javascript:alert(1)"
        html = renderer.render_detail(article, [], saved=False)
        self.assertNotIn("Read original", html)
        self.assertNotIn("javascript:", html)


class TestWebApp(unittest.TestCase):
    def setUp(self):
        self.source = MagicMock()
        self.source.fetch.return_value = [
            make_article(10, "Bitcoin <b>rally</b>", currencies=[("BTC", "Bitcoin")],
                         tags=["Markets"], positive=3),
            make_article(11, "Ethereum update", hours_ago=1, currencies=[("ETH", "Ethereum")],
                         tags=["Markets"], positive=9),
            make_article(12, "Solana outage", hours_ago=2, currencies=[("SOL", "Solana")]),
        ]
        self.store = MagicMock()
        self.store.load.return_value = []
        self.reader = NewsReader(self.source, self.store, fallback=[make_article(1, "Sample story")])
        self.reader.load_news()

        with patch.dict(os.environ, {}, clear=True):
            settings = get_settings({"api": {"base_url": "https://upstream.example.com"}})
        self.app = create_app(
            reader=self.reader, settings=settings, renderer=PageRenderer(now=BASE_TIME)
        )
        self.client = self.app.test_client()

    def test_index_lists_hot_articles(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        html = resp.get_data(as_text=True)
        self.assertIn('data-theme="light"', html)
        self.assertLess(html.index("Ethereum update"), html.index("Solana outage"))
        self.assertIn("Bitcoin &lt;b&gt;rally&lt;/b&gt;", html)
        self.assertIn("Trending Cryptocurrencies", html)

    def test_index_search_and_filter(self):
        html = self.client.get("/?q=sol&filter=rising").get_data(as_text=True)
        self.assertIn("Solana outage", html)
        self.assertNotIn("Ethereum update", html)
        self.assertEqual(self.reader.state.query, "sol")

        html = self.client.get("/?q=&filter=saved").get_data(as_text=True)
        self.assertIn("No articles found matching your criteria", html)

    def test_unknown_filter_keeps_current(self):
        self.client.get("/?filter=bogus")
        self.assertEqual(self.reader.state.filter_mode.value, "hot")

    def test_detail_page_with_related(self):
        resp = self.client.get("/news/10")
        self.assertEqual(resp.status_code, 200)
        html = resp.get_data(as_text=True)
        self.assertIn("Related Articles", html)
        self.assertIn("/news/11", html)
        self.assertNotIn("/news/12", html)

    def test_detail_not_found(self):
        for path in ("/news/999", "/news/abc", "/news/\u00b2", "/news/1_0", "/news/+10"):
            resp = self.client.get(path)
            self.assertEqual(resp.status_code, 404)
            html = resp.get_data(as_text=True)
            self.assertIn("Article not found", html)
            self.assertIn('href="/"', html)

    def test_toggle_saved(self):
        resp = self.client.post("/saved/11")
        self.assertEqual(resp.status_code, 302)
        self.store.save.assert_called_with((11,))
        data = self.client.get("/api/saved").get_json()
        self.assertEqual(data, {"data": [11]})

    def test_theme_toggle(self):
        self.client.post("/theme")
        html = self.client.get("/").get_data(as_text=True)
        self.assertIn('data-theme="dark"', html)

    def test_banner_retry_and_dismiss(self):
        self.source.fetch.side_effect = FetchError("HTTP 500")
        self.client.post("/refresh")
        html = self.client.get("/").get_data(as_text=True)
        self.assertIn("Live news unavailable (HTTP 500). Showing sample articles.", html)
        self.assertIn("Sample story", html)
        self.assertIn('action="/refresh"', html)

        self.client.post("/banner/dismiss")
        html = self.client.get("/").get_data(as_text=True)
        self.assertNotIn("Live news unavailable", html)

    def test_api_news(self):
        data = self.client.get("/api/news?filter=rising").get_json()["data"]
        self.assertEqual(data["filter"], "rising")
        self.assertEqual([a["id"] for a in data["items"]], [10, 11, 12])
        self.assertEqual(data["items"][0]["published_at"], BASE_TIME.isoformat())
        # API query args do not change the stored view
        self.assertEqual(self.reader.state.filter_mode.value, "hot")

    def test_api_news_detail(self):
        data = self.client.get("/api/news/11").get_json()["data"]
        self.assertEqual(data["article"]["title"], "Ethereum update")
        self.assertFalse(data["saved"])
        self.assertEqual([a["id"] for a in data["related"]], [10])

        resp = self.client.get("/api/news/999")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.get_json()["error"], "not_found")

    @patch("crypto_news.web.proxy.requests.get")
    def test_proxy_forwards_to_upstream(self, mock_get):
        upstream = MagicMock()
        upstream.content = b'{"Data": []}'
        upstream.status_code = 200
        upstream.headers = {"Content-Type": "application/json", "Content-Length": "12"}
        mock_get.return_value = upstream

        resp = self.client.get("/cc/data/v2/news/?lang=EN")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json(), {"Data": []})
        args, kwargs = mock_get.call_args
        self.assertEqual(args[0], "https://upstream.example.com/data/v2/news/")
        self.assertEqual(kwargs["params"], {"lang": ["EN"]})

    @patch("crypto_news.web.proxy.requests.get")
    def test_proxy_upstream_failure(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("refused")
        resp = self.client.get("/cc/data/v2/news/")
        self.assertEqual(resp.status_code, 502)


if __name__ == "__main__":
    unittest.main()
