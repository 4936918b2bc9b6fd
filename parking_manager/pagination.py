from dataclasses import dataclass

from parking_manager.config import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE, SQL_INTEGER_MAX


@dataclass(frozen=True)
class Page:
    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def is_empty(self) -> bool:
        # Non-positive page numbers or sizes select nothing rather than a negative offset;
        # an offset past the largest bindable integer is past every stored row
        return self.page_number < 1 or self.page_size < 1 or self.offset > SQL_INTEGER_MAX

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def limit(self) -> int:
        return min(self.page_size, SQL_INTEGER_MAX)


async def paginate(store, page: Page) -> list:
    if page.is_empty:
        return []
    return await store.list(page.offset, page.limit)
