"""
Bundled sample articles shown when live news is unavailable.
"""

import datetime
from typing import List, Optional

from crypto_news.models import Article, Currency, Votes

BITCOIN = Currency(code="BTC", title="Bitcoin", slug="bitcoin", url="")
ETHEREUM = Currency(code="ETH", title="Ethereum", slug="ethereum", url="")
CARDANO = Currency(code="ADA", title="Cardano", slug="cardano", url="")


def _votes(positive: int, negative: int, important: int, liked: int,
           disliked: int, saved_count: int, comments: int) -> Votes:
    return Votes(
        positive=positive,
        negative=negative,
        important=important,
        liked=liked,
        disliked=disliked,
        funny=0,
        toxic=0,
        saved_count=saved_count,
        comments=comments,
    )


def sample_articles(now: Optional[datetime.datetime] = None) -> List[Article]:
    """Returns the fallback dataset, published at hourly intervals before now."""
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    hour = datetime.timedelta(hours=1)

    return [
        Article(
            id=1,
            title="Bitcoin Surges Past $50,000 as Institutional Interest Grows",
            slug="bitcoin-surges",
            published_at=now,
            url="https://example.com/bitcoin-surge",
            currencies=[BITCOIN],
            domain="example.com",
            votes=_votes(42, 0, 10, 38, 2, 15, 8),
            metadata={
                "description": (
                    "Bitcoin has surged past $50,000 for the first time since "
                    "December 2021, as institutional investors continue to show "
                    "strong interest in the cryptocurrency market. The milestone "
                    "comes as several major financial institutions announce new "
                    "Bitcoin investment products and services.\n\n"
                    "Analysts attribute the price increase to growing institutional "
                    "adoption and the upcoming Bitcoin halving event. Market data "
                    "shows significant accumulation by both retail and institutional "
                    "investors, with exchange outflows reaching new highs.\n\n"
                    "The surge has also positively impacted the broader "
                    "cryptocurrency market, with several altcoins seeing "
                    "double-digit percentage gains. Trading volumes across major "
                    "exchanges have increased substantially, indicating renewed "
                    "market interest."
                ),
                "image": "https://images.unsplash.com/photo-1518546305927-5a555bb7020d?w=1200",
                "author": "Sarah Johnson",
                "reading_time": "5 min read",
                "tags": [
                    "Bitcoin",
                    "Cryptocurrency",
                    "Market Analysis",
                    "Institutional Investment",
                ],
            },
        ),
        Article(
            id=2,
            title="Ethereum 2.0 Upgrade Shows Strong Progress in Testing Phase",
            slug="ethereum-2-progress",
            published_at=now - hour,
            url="https://example.com/ethereum-2-progress",
            currencies=[ETHEREUM],
            domain="example.com",
            votes=_votes(35, 2, 8, 30, 2, 12, 5),
            metadata={
                "description": (
                    "The Ethereum 2.0 upgrade continues to show promising results in "
                    "its testing phase, with developers reporting significant "
                    "improvements in scalability and energy efficiency. The latest "
                    "testnet data reveals a 99% reduction in energy consumption and "
                    "transaction costs.\n\n"
                    "Staking participation has reached an all-time high, with over "
                    "500,000 validators securing the network. The development team "
                    "has successfully implemented several crucial protocol "
                    "improvements, including enhanced validator performance and "
                    "reduced network congestion.\n\n"
                    "The upgrade's success has attracted attention from enterprise "
                    "users, with several major companies announcing plans to build "
                    "on the Ethereum network."
                ),
                "image": "https://images.unsplash.com/photo-1622630998477-20aa696ecb05?w=1200",
                "author": "Michael Chen",
                "reading_time": "7 min read",
                "tags": ["Ethereum", "Blockchain", "Technology", "Cryptocurrency"],
            },
        ),
        Article(
            id=3,
            title="Cardano Launches New DeFi Protocol, ADA Price Surges",
            slug="cardano-defi-launch",
            published_at=now - 2 * hour,
            url="https://example.com/cardano-defi",
            currencies=[CARDANO],
            domain="example.com",
            votes=_votes(28, 1, 5, 25, 1, 8, 3),
            metadata={
                "description": (
                    "Cardano's ecosystem expands with the launch of a new DeFi "
                    "protocol, leading to a significant price increase for ADA as "
                    "traders react to the news. The protocol introduces innovative "
                    "features for decentralized lending and borrowing, with built-in "
                    "security measures to protect users.\n\n"
                    "Early adoption metrics show strong user engagement, with over "
                    "$100 million in total value locked within the first 24 hours."
                ),
                "image": "https://images.unsplash.com/photo-1621761191319-c6fb62004040?w=1200",
                "author": "Elena Rodriguez",
                "reading_time": "6 min read",
                "tags": ["Cardano", "DeFi", "Blockchain", "Cryptocurrency"],
            },
        ),
        Article(
            id=4,
            title="New Regulatory Framework Proposed for Cryptocurrency Trading",
            slug="crypto-regulations",
            published_at=now - 3 * hour,
            url="https://example.com/crypto-regulations",
            currencies=[BITCOIN, ETHEREUM],
            domain="example.com",
            votes=_votes(45, 5, 15, 40, 5, 20, 12),
            metadata={
                "description": (
                    "Global financial regulators have proposed a new framework for "
                    "cryptocurrency trading, aiming to create a balanced approach "
                    "between innovation and consumer protection. The proposal "
                    "includes guidelines for exchange operations, custody services, "
                    "and DeFi protocols.\n\n"
                    "The framework emphasizes transparency requirements, capital "
                    "reserves, and regular auditing procedures. Industry leaders "
                    "have generally responded positively, noting that clear "
                    "regulations could encourage institutional participation."
                ),
                "image": "https://images.unsplash.com/photo-1605792657660-596af9009e82?w=1200",
                "author": "Robert Williams",
                "reading_time": "8 min read",
                "tags": ["Regulation", "Cryptocurrency", "Policy", "Global Markets"],
            },
        ),
    ]
