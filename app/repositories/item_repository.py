from app.models.item import Item
from app.repositories.base import JpaRepository


# Item은 식별자를 직접 할당하므로 save()는 Item.is_new()로 insert / merge를 결정한다
class ItemRepository(JpaRepository[Item, str]):
    model = Item
