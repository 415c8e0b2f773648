"""Author Repository — natural-key lookups and ordered listing."""

from bookstore.models.author import Author
from bookstore.repositories.base import Repository


class AuthorRepository(Repository[Author]):
    model = Author

    async def exists_by_name(self, first_name: str, last_name: str) -> bool:
        return await self.exists(
            Author.first_name == first_name, Author.last_name == last_name,
        )

    async def get_all_ordered(self) -> list[Author]:
        return await self.find(order_by=(Author.last_name, Author.first_name))
