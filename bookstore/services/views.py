"""View Assembly — ORM graphs to immutable response views.

Invariants:
    - Input entities have the needed collections eager-loaded (no lazy loads)
    - Related entities appear once each, whatever the number of join rows
    - Ordering is deterministic: authors by last/first name, stores and books
      by name/title
"""

from bookstore.models.author import Author
from bookstore.models.book import Book
from bookstore.models.store import Store
from bookstore.schemas.book import BookDetails
from bookstore.schemas.store import StockedBook, StoreDetails
from bookstore.schemas.summaries import AuthorSummary, BookSummary, StoreSummary


def _distinct(entities):
    return list({e.id: e for e in entities}.values())


def author_summary(author: Author) -> AuthorSummary:
    return AuthorSummary.model_validate(author)


def store_summary(store: Store) -> StoreSummary:
    return StoreSummary.model_validate(store)


def book_summary(book: Book) -> BookSummary:
    return BookSummary.model_validate(book)


def book_details(book: Book) -> BookDetails:
    """book must come from BookRepository.get_details."""
    authors = sorted(
        _distinct(link.author for link in book.author_links),
        key=lambda a: (a.last_name, a.first_name),
    )
    stores = sorted(
        _distinct(link.store for link in book.store_links),
        key=lambda s: s.name,
    )
    return BookDetails(
        id=book.id,
        isbn=book.isbn,
        title=book.title,
        description=book.description,
        authors=[author_summary(a) for a in authors],
        stores=[store_summary(s) for s in stores],
    )


def store_details(store: Store) -> StoreDetails:
    """store must come from StoreRepository.get_with_books."""
    books = sorted(_distinct(link.book for link in store.book_links), key=lambda b: b.title)
    return StoreDetails(
        id=store.id,
        name=store.name,
        location=store.location,
        books=[book_summary(b) for b in books],
    )


def stocked_books(store: Store) -> list[StockedBook]:
    links = sorted(store.book_links, key=lambda link: link.book.title)
    return [
        StockedBook(
            id=link.book.id,
            isbn=link.book.isbn,
            title=link.book.title,
            description=link.book.description,
            quantity=link.quantity,
        )
        for link in links
    ]
