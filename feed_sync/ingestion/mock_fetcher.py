"""
Mock fetcher for testing and development.

Generates synthetic hotel and restaurant articles that mimic what the
La Revue WordPress feeds return. Useful for:
- Running the pipeline without network access
- Demonstrating idempotent re-syncs (items are deterministic per feed)
- Development and debugging
"""

from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

from feed_sync.ingestion.feed_client import FeedFetcher
from feed_sync.ingestion.schemas import FetchResult, RawItem

# Sample content templates for realistic mock data
TITLE_TEMPLATES = [
    "  Le {name} rouvre ses portes à {city}  ",
    "Notre coup de coeur de la semaine : {name}",
    "{name}, l'adresse qui monte à {city}",
    "Trois bonnes raisons de découvrir {name}",
    "Rencontre avec l'équipe du {name}",
]

BODY_TEMPLATES = [
    "<p>Installé au coeur de {city}, le {name} propose une expérience "
    "soignée et une équipe aux petits soins.</p>"
    "<script>trackView('{slug}')</script>",
    "<p>Nous avons testé le {name} pendant un week-end.</p>"
    "<!-- wp:more --><p>Verdict : une adresse à retenir à {city}.</p>",
    "<style>.wp-block{{margin:0}}</style><p>Le {name} mise sur les produits "
    "locaux et une décoration chaleureuse, à deux pas du centre de {city}.</p>",
]

SAMPLE_NAMES = [
    "Grand Hôtel du Lac",
    "Maison Colette",
    "Le Comptoir des Halles",
    "Villa Mirabeau",
    "Brasserie du Port",
    "Hôtel des Arts",
    "La Table de Jeanne",
]

SAMPLE_CITIES = ["Paris", "Lyon", "Bordeaux", "Annecy", "Nantes", "Biarritz"]


class MockFeedFetcher(FeedFetcher):
    """
    Fetcher that generates deterministic synthetic feed items.

    The same feed URL always yields the same links, so a second sync
    against the same store adds nothing.
    """

    def __init__(
        self,
        items_per_feed: int = 10,
        failing_feeds: set[str] | None = None,
    ):
        """
        Initialize mock fetcher.

        Args:
            items_per_feed: Number of items generated per feed
            failing_feeds: Feed URLs that report an error status
        """
        self._items_per_feed = items_per_feed
        self._failing_feeds = failing_feeds or set()
        self.calls: list[str] = []

    async def fetch(self, feed_url: str, max_items: int) -> FetchResult:
        self.calls.append(feed_url)

        if feed_url in self._failing_feeds:
            return FetchResult(status="error", message=f"Mock failure for {feed_url}")

        count = min(self._items_per_feed, max_items)
        return FetchResult(items=[self._generate(feed_url, i) for i in range(count)])

    def _generate(self, feed_url: str, index: int) -> RawItem:
        name = SAMPLE_NAMES[index % len(SAMPLE_NAMES)]
        city = SAMPLE_CITIES[index % len(SAMPLE_CITIES)]
        slug = f"{name.lower().replace(' ', '-')}-{index}"
        base_url = feed_url.removesuffix("/feed").rstrip("/")

        published = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc) + timedelta(days=index)

        return RawItem(
            title=TITLE_TEMPLATES[index % len(TITLE_TEMPLATES)].format(name=name, city=city),
            link=f"{base_url}/{slug}/",
            published_at=format_datetime(published),
            body_html=BODY_TEMPLATES[index % len(BODY_TEMPLATES)].format(
                name=name, city=city, slug=slug
            ),
            summary_html=f"<p>{name} à {city}.</p>" if index % 2 == 0 else None,
            thumbnail_url=f"{base_url}/wp-content/uploads/{slug}.jpg" if index % 3 == 0 else None,
            enclosure_url=f"{base_url}/wp-content/uploads/{slug}-cover.jpg" if index % 3 == 1 else None,
        )
