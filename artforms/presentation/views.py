"""
HTML fragment views for artworks, artists and pagination.

Each view is built from the camelCase JSON the API returns and renders with a
mustache template. ``{{name}}`` is HTML-escaped by chevron. The only value
inserted raw with ``{{{name}}}`` is the artist detail's nested artwork cards,
which are themselves rendered through chevron.

Reference: https://github.com/noahmorrison/chevron
"""

from typing import Optional

import chevron

PLACEHOLDER_ARTWORK = "/images/placeholder-artwork.jpg"
DEFAULT_AVATAR = "/images/default-avatar.png"

ARTWORK = "artwork"
ARTIST = "artist"


def format_price(price: float, currency: str = "INR") -> str:
    if currency == "INR":
        return f"₹{price:,.0f}"
    return f"{currency} {price:,.2f}"


def truncate(text: Optional[str], length: int) -> str:
    text = text or ""
    if len(text) <= length:
        return text
    return text[:length] + "..."


def format_location(location: Optional[dict]) -> str:
    location = location or {}
    return ", ".join(part for part in (location.get("city"), location.get("state")) if part)


def _first_image(artwork: dict) -> str:
    images = artwork.get("images") or []
    return images[0]["url"] if images else PLACEHOLDER_ARTWORK


class View:
    """
    A mounted fragment bound to one entity.

    ``kind``/``entity_id`` identify the entity; ``active``/``count`` are the
    per-user flag (liked, following) and the counter (likes, followers) that
    toggles change.
    """

    kind: str = ""
    template: str = ""

    def __init__(self, entity_id: Optional[int], active: bool = False, count: int = 0):
        self.entity_id = entity_id
        self.active = active
        self.count = count
        self.children: list["View"] = []

    def context(self) -> dict:
        return {}

    def reconcile(self, active: bool, count: int) -> None:
        self.active = active
        self.count = count

    def render(self) -> str:
        return chevron.render(self.template, self.context())

    def __repr__(self) -> str:
        return f"<{type(self).__name__}({self.kind}={self.entity_id}, active={self.active}, count={self.count})>"


class ArtworkCard(View):
    kind = ARTWORK
    template = """\
<div class="card artwork-card" data-artwork-id="{{id}}">
  <div class="card-image-container">
    <img src="{{image}}" alt="{{title}}" class="card-image">
    <div class="card-overlay">
      {{#canLike}}
      <button class="action-btn like-btn" data-artwork-id="{{id}}" data-liked="{{liked}}">
        <i class="fas fa-heart"></i>
      </button>
      {{/canLike}}
      <div class="artwork-badges">
        <span class="artform-badge">{{artform}}</span>
        {{#featured}}<span class="featured-badge">Featured</span>{{/featured}}
        {{#isForSale}}<span class="forsale-badge">For Sale</span>{{/isForSale}}
      </div>
    </div>
  </div>
  <div class="card-content">
    <h3 class="card-title">{{title}}</h3>
    <p class="card-subtitle">by <span class="artist-name" data-artist-id="{{artistId}}">{{artistName}}</span></p>
    <p class="card-description">{{description}}</p>
    <div class="card-footer">
      <span class="card-price">{{price}}</span>
      <div class="card-stats">
        <span class="likes-count"><i class="fas fa-heart"></i> {{likes}}</span>
        <span class="views-count"><i class="fas fa-eye"></i> {{views}}</span>
      </div>
    </div>
  </div>
</div>
"""

    def __init__(self, artwork: dict, liked: bool = False, can_like: bool = False):
        super().__init__(artwork["id"], active=liked, count=artwork.get("likes", 0))
        self.artwork = artwork
        self.can_like = can_like

    @property
    def liked(self) -> bool:
        return self.active

    @property
    def likes(self) -> int:
        return self.count

    def context(self) -> dict:
        artwork = self.artwork
        artist = artwork.get("artist") or {}
        user = artist.get("user") or {}
        return {
            "id": self.entity_id,
            "title": artwork["title"],
            "image": _first_image(artwork),
            "artform": artwork.get("artform", ""),
            "featured": artwork.get("featured", False),
            "isForSale": artwork.get("isForSale", False),
            "artistId": artwork.get("artistId", artist.get("id")),
            "artistName": user.get("name") or artist.get("artistName", ""),
            "description": truncate(artwork.get("description"), 100),
            "price": format_price(artwork.get("price", 0), artwork.get("currency", "INR")),
            "likes": self.count,
            "views": artwork.get("views", 0),
            "liked": "true" if self.active else "false",
            "canLike": self.can_like,
        }


class ArtworkDetail(ArtworkCard):
    template = """\
<article class="artwork-detail" data-artwork-id="{{id}}">
  <div class="artwork-images">
    <img src="{{image}}" alt="{{title}}" class="main-image">
    {{#images}}<img src="{{url}}" alt="{{caption}}" class="thumbnail">{{/images}}
  </div>
  <div class="artwork-info">
    <h2>{{title}}</h2>
    <p class="artist">by <span class="artist-name" data-artist-id="{{artistId}}">{{artistName}}</span></p>
    <span class="artform-badge">{{artform}}</span>
    <p class="description">{{fullDescription}}</p>
    {{#culturalSignificance}}<div class="cultural-significance"><h4>Cultural Significance</h4><p>{{culturalSignificance}}</p></div>{{/culturalSignificance}}
    <dl class="artwork-meta">
      <dt>Medium</dt><dd>{{medium}}</dd>
      {{#dimensions}}<dt>Dimensions</dt><dd>{{dimensions}}</dd>{{/dimensions}}
      {{#yearCreated}}<dt>Year</dt><dd>{{yearCreated}}</dd>{{/yearCreated}}
    </dl>
    <ul class="tags">{{#tags}}<li class="tag">{{.}}</li>{{/tags}}</ul>
    <div class="artwork-stats">
      <span class="likes-count">{{likes}} likes</span>
      <span class="views-count">{{views}} views</span>
    </div>
    {{#canLike}}
    <button class="like-btn-large" data-artwork-id="{{id}}" data-liked="{{liked}}">{{likeLabel}}</button>
    {{/canLike}}
    {{#isForSale}}<div class="price-section"><span class="price">{{price}}</span></div>{{/isForSale}}
    {{#isSold}}<span class="sold-badge">Sold</span>{{/isSold}}
  </div>
</article>
"""

    def context(self) -> dict:
        ctx = super().context()
        artwork = self.artwork
        dimensions = artwork.get("dimensions") or {}
        if dimensions.get("width") and dimensions.get("height"):
            dims = f"{dimensions['width']} × {dimensions['height']} {dimensions.get('unit', 'cm')}"
        else:
            dims = ""
        ctx.update(
            {
                "images": artwork.get("images") or [],
                "fullDescription": artwork.get("description", ""),
                "culturalSignificance": artwork.get("culturalSignificance") or "",
                "medium": artwork.get("medium", ""),
                "dimensions": dims,
                "yearCreated": artwork.get("yearCreated") or "",
                "tags": artwork.get("tags") or [],
                "isSold": artwork.get("isSold", False),
                "likeLabel": "Liked" if self.active else "Like",
            }
        )
        return ctx


class ArtistCard(View):
    kind = ARTIST
    template = """\
<div class="card artist-card" data-artist-id="{{id}}">
  <img src="{{avatar}}" alt="{{name}}" class="artist-avatar">
  <div class="card-content">
    <h3 class="card-title">{{name}}{{#isVerified}} <i class="fas fa-check-circle verified"></i>{{/isVerified}}</h3>
    {{#location}}<p class="artist-location"><i class="fas fa-map-marker-alt"></i> {{location}}</p>{{/location}}
    <div class="specializations">{{#specializations}}<span class="specialization-tag">{{.}}</span>{{/specializations}}</div>
    <div class="artist-stats">
      <span class="artworks-count">{{artworkCount}} artworks</span>
      <span class="followers-count">{{followers}} followers</span>
      <span class="rating">{{rating}}</span>
    </div>
    {{#canFollow}}
    <button class="btn follow-btn" data-artist-id="{{id}}" data-following="{{following}}">{{followLabel}}</button>
    {{/canFollow}}
  </div>
</div>
"""

    def __init__(self, artist: dict, following: bool = False, can_follow: bool = False):
        super().__init__(artist["id"], active=following, count=artist.get("followers", 0))
        self.artist = artist
        self.can_follow = can_follow

    @property
    def following(self) -> bool:
        return self.active

    @property
    def followers(self) -> int:
        return self.count

    def context(self) -> dict:
        artist = self.artist
        user = artist.get("user") or {}
        return {
            "id": self.entity_id,
            "name": artist.get("artistName") or user.get("name", ""),
            "avatar": user.get("profileImage") or DEFAULT_AVATAR,
            "location": format_location(user.get("location")),
            "specializations": artist.get("specializations") or [],
            "isVerified": artist.get("isVerified", False),
            "artworkCount": artist.get("artworkCount", 0),
            "followers": self.count,
            "rating": f"{artist.get('rating', 0):.1f}",
            "following": "true" if self.active else "false",
            "followLabel": "Following" if self.active else "Follow",
            "canFollow": self.can_follow,
        }


class ArtistDetail(ArtistCard):
    template = """\
<section class="artist-detail" data-artist-id="{{id}}">
  <header class="artist-header">
    <img src="{{avatar}}" alt="{{name}}" class="artist-avatar-large">
    <div>
      <h2>{{name}}{{#isVerified}} <i class="fas fa-check-circle verified"></i>{{/isVerified}}</h2>
      {{#location}}<p class="artist-location">{{location}}</p>{{/location}}
      {{#experience}}<p class="experience">{{experience}} years of experience</p>{{/experience}}
      <div class="artist-stats">
        <span class="artworks-count">{{artworkCount}} artworks</span>
        <span class="followers-count">{{followers}} followers</span>
        <span class="rating">{{rating}}</span>
      </div>
      {{#canFollow}}
      <button class="btn follow-btn" data-artist-id="{{id}}" data-following="{{following}}">{{followLabel}}</button>
      {{/canFollow}}
    </div>
  </header>
  {{#bio}}<p class="bio">{{bio}}</p>{{/bio}}
  <div class="specializations">{{#specializations}}<span class="specialization-tag">{{.}}</span>{{/specializations}}</div>
  {{#hasAwards}}<h3>Awards</h3><ul class="awards">{{#awards}}<li>{{title}} ({{year}}) {{organization}}</li>{{/awards}}</ul>{{/hasAwards}}
  {{#hasExhibitions}}<h3>Exhibitions</h3><ul class="exhibitions">{{#exhibitions}}<li>{{title}}, {{venue}} ({{year}})</li>{{/exhibitions}}</ul>{{/hasExhibitions}}
  <div class="artworks-grid">{{{artworks}}}</div>
</section>
"""

    def __init__(
        self,
        artist: dict,
        following: bool = False,
        can_follow: bool = False,
        liked_artworks: frozenset[int] = frozenset(),
        can_like: bool = False,
    ):
        super().__init__(artist, following=following, can_follow=can_follow)
        # Recent artworks come without the embedded artist
        owner = {
            "id": artist["id"],
            "artistName": artist.get("artistName"),
            "user": artist.get("user"),
        }
        for artwork in artist.get("artworks") or []:
            embedded = {**artwork, "artist": owner}
            self.children.append(
                ArtworkCard(embedded, liked=artwork["id"] in liked_artworks, can_like=can_like)
            )

    def context(self) -> dict:
        ctx = super().context()
        artist = self.artist
        awards = artist.get("awards") or []
        exhibitions = artist.get("exhibitions") or []
        ctx.update(
            {
                "bio": (artist.get("user") or {}).get("bio") or "",
                "experience": artist.get("experience") or "",
                "awards": awards,
                "hasAwards": bool(awards),
                "exhibitions": exhibitions,
                "hasExhibitions": bool(exhibitions),
                "artworks": "".join(child.render() for child in self.children),
            }
        )
        return ctx


class PaginationView(View):
    """
    Page buttons: previous, a window of two pages around the current one,
    first/last with ellipses, next. Renders nothing for a single page.
    """

    kind = "pagination"
    template = """\
{{#show}}<nav class="pagination">
{{#hasPrev}}<button data-page="{{prev}}">Previous</button>{{/hasPrev}}
{{#items}}{{#ellipsis}}<span class="pagination-ellipsis">...</span>{{/ellipsis}}{{^ellipsis}}<button data-page="{{page}}"{{#current}} class="active"{{/current}}>{{page}}</button>{{/ellipsis}}
{{/items}}
{{#hasNext}}<button data-page="{{next}}">Next</button>{{/hasNext}}
</nav>{{/show}}"""

    WINDOW = 2

    def __init__(self, pagination: dict):
        super().__init__(None)
        self.current = pagination.get("current", 1)
        self.pages = pagination.get("pages", 0)
        self.total = pagination.get("total", 0)

    def items(self) -> list[dict]:
        start = max(1, self.current - self.WINDOW)
        end = min(self.pages, self.current + self.WINDOW)
        items = []
        if start > 1:
            items.append({"page": 1, "current": False, "ellipsis": False})
            if start > 2:
                items.append({"ellipsis": True})
        for page in range(start, end + 1):
            items.append({"page": page, "current": page == self.current, "ellipsis": False})
        if end < self.pages:
            if end < self.pages - 1:
                items.append({"ellipsis": True})
            items.append({"page": self.pages, "current": False, "ellipsis": False})
        return items

    def context(self) -> dict:
        return {
            "show": self.pages > 1,
            "hasPrev": self.current > 1,
            "prev": self.current - 1,
            "hasNext": self.current < self.pages,
            "next": self.current + 1,
            "items": self.items(),
        }
