"""Banner aggregate: storefront hero and promotion slots."""

from protean.fields import Boolean, Integer, String, Text

from shared.domain import storefront


@storefront.aggregate
class Banner:
    title = String(required=True, max_length=255)
    description = Text()
    image = Text(required=True)
    link = Text()
    type = String(required=True, max_length=50)
    active = Boolean(default=True)
    position = Integer(default=0)

    def update_details(self, **changes):
        for field in ("title", "description", "image", "link", "type", "active", "position"):
            value = changes.get(field)
            if value is not None:
                setattr(self, field, value)


@storefront.repository(part_of=Banner)
class BannerRepository:
    def list_by_type(self, banner_type: str | None = None) -> list[Banner]:
        query = self._dao.query
        if banner_type:
            query = query.filter(type=banner_type)
        return query.order_by("position").all().items
