"""SQLAlchemy-backed implementations of the repository ports."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session, selectinload

from bookstore.domain.model.book import Book
from bookstore.domain.model.cart import CartItem
from bookstore.domain.model.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
)
from bookstore.domain.model.value_objects import Address, Money, Quantity
from bookstore.domain.repository.book_repository import BookRepository
from bookstore.domain.repository.cart_repository import CartRepository
from bookstore.domain.repository.order_repository import OrderRepository
from bookstore.infrastructure.persistence.models import (
    BookRecord,
    CartItemRecord,
    OrderItemRecord,
    OrderRecord,
)


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC.
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class SqlAlchemyBookRepository(BookRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- BookRepository interface ---------------------------------------------

    def get_by_id(self, book_id: str) -> Book | None:
        record = self._session.get(BookRecord, book_id, populate_existing=True)
        return self._to_domain(record) if record is not None else None

    def list_page(self, offset: int, limit: int) -> list[Book]:
        stmt = select(BookRecord).order_by(BookRecord.title).offset(offset).limit(limit)
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def count(self) -> int:
        return self._session.scalar(select(func.count()).select_from(BookRecord)) or 0

    def save(self, book: Book) -> None:
        record = self._session.get(BookRecord, book.id)
        if record is None:
            record = BookRecord(id=book.id, created_at=book.created_at)
            self._session.add(record)
        record.title = book.title
        record.isbn = book.isbn
        record.price = book.price.amount
        record.sale_price = book.sale_price.amount if book.sale_price is not None else None
        record.currency = book.price.currency
        record.stock = book.stock
        record.cover_image = book.cover_image
        record.updated_at = book.updated_at
        self._session.flush()

    def decrement_stock(self, book_id: str, quantity: int) -> bool:
        stmt = (
            update(BookRecord)
            .where(BookRecord.id == book_id, BookRecord.stock >= quantity)
            .values(stock=BookRecord.stock - quantity, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )
        return self._session.execute(stmt).rowcount == 1

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(record: BookRecord) -> Book:
        return Book(
            id=record.id,
            title=record.title,
            price=Money(Decimal(record.price), record.currency),
            stock=record.stock,
            sale_price=(
                Money(Decimal(record.sale_price), record.currency)
                if record.sale_price is not None
                else None
            ),
            cover_image=record.cover_image,
            isbn=record.isbn,
            created_at=_aware(record.created_at),
            updated_at=_aware(record.updated_at),
        )


class SqlAlchemyCartRepository(CartRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- CartRepository interface ---------------------------------------------

    def get_by_id(self, item_id: str) -> CartItem | None:
        record = self._session.get(CartItemRecord, item_id)
        return self._to_domain(record) if record is not None else None

    def get_for_book(self, user_id: str, book_id: str) -> CartItem | None:
        stmt = select(CartItemRecord).where(
            CartItemRecord.user_id == user_id, CartItemRecord.book_id == book_id
        )
        record = self._session.scalars(stmt).first()
        return self._to_domain(record) if record is not None else None

    def list_for_user(self, user_id: str) -> list[CartItem]:
        stmt = (
            select(CartItemRecord)
            .where(CartItemRecord.user_id == user_id)
            .order_by(CartItemRecord.created_at.desc())
        )
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def save(self, item: CartItem) -> None:
        record = self._session.get(CartItemRecord, item.id)
        if record is None:
            record = CartItemRecord(
                id=item.id,
                user_id=item.user_id,
                book_id=item.book_id,
                created_at=item.created_at,
            )
            self._session.add(record)
        record.quantity = item.quantity
        self._session.flush()

    def delete(self, item_id: str) -> None:
        self._session.execute(
            delete(CartItemRecord)
            .where(CartItemRecord.id == item_id)
            .execution_options(synchronize_session=False)
        )

    def delete_for_user(self, user_id: str, book_ids: Iterable[str] | None = None) -> int:
        stmt = delete(CartItemRecord).where(CartItemRecord.user_id == user_id)
        if book_ids is not None:
            stmt = stmt.where(CartItemRecord.book_id.in_(list(book_ids)))
        result = self._session.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(record: CartItemRecord) -> CartItem:
        return CartItem(
            id=record.id,
            user_id=record.user_id,
            book_id=record.book_id,
            quantity=record.quantity,
            created_at=_aware(record.created_at),
        )


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        self._session.add(self._to_record(order))
        self._session.flush()

    def get_by_id(self, order_id: str) -> Order | None:
        stmt = (
            select(OrderRecord)
            .options(selectinload(OrderRecord.items))
            .where(OrderRecord.id == order_id)
            .execution_options(populate_existing=True)
        )
        record = self._session.scalars(stmt).first()
        return self._to_domain(record) if record is not None else None

    def get_by_order_number(self, order_number: str) -> Order | None:
        stmt = (
            select(OrderRecord)
            .options(selectinload(OrderRecord.items))
            .where(OrderRecord.order_number == order_number)
            .execution_options(populate_existing=True)
        )
        record = self._session.scalars(stmt).first()
        return self._to_domain(record) if record is not None else None

    def list_for_user(
        self,
        user_id: str,
        offset: int,
        limit: int,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        stmt = (
            select(OrderRecord)
            .options(selectinload(OrderRecord.items))
            .where(OrderRecord.user_id == user_id)
        )
        if status is not None:
            stmt = stmt.where(OrderRecord.status == status.value)
        stmt = stmt.order_by(OrderRecord.created_at.desc()).offset(offset).limit(limit)
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def count_for_user(self, user_id: str, status: OrderStatus | None = None) -> int:
        stmt = select(func.count()).select_from(OrderRecord).where(OrderRecord.user_id == user_id)
        if status is not None:
            stmt = stmt.where(OrderRecord.status == status.value)
        return self._session.scalar(stmt) or 0

    def update_payment(self, order: Order, expected: PaymentStatus) -> bool:
        stmt = (
            update(OrderRecord)
            .where(
                OrderRecord.id == order.id,
                OrderRecord.payment_status == expected.value,
            )
            .values(
                payment_status=order.payment_status.value,
                payment_method=order.payment_method.value,
                updated_at=order.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        return self._session.execute(stmt).rowcount == 1

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_record(order: Order) -> OrderRecord:
        return OrderRecord(
            id=order.id,
            order_number=order.order_number,
            user_id=order.user_id,
            status=order.status.value,
            payment_method=order.payment_method.value,
            payment_status=order.payment_status.value,
            currency=order.total.currency,
            subtotal=order.subtotal.amount,
            shipping_cost=order.shipping_cost.amount,
            tax=order.tax.amount,
            total=order.total.amount,
            shipping_address=order.shipping_address.to_dict(),
            billing_address=order.billing_address.to_dict(),
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemRecord(
                    position=position,
                    book_id=item.book_id,
                    title=item.title,
                    cover_image=item.cover_image,
                    quantity=item.quantity.value,
                    price=item.price.amount,
                )
                for position, item in enumerate(order.items)
            ],
        )

    @staticmethod
    def _to_domain(record: OrderRecord) -> Order:
        currency = record.currency
        return Order(
            id=record.id,
            order_number=record.order_number,
            user_id=record.user_id,
            items=[
                OrderItem(
                    book_id=i.book_id,
                    title=i.title,
                    quantity=Quantity(i.quantity),
                    price=Money(Decimal(i.price), currency),
                    cover_image=i.cover_image,
                )
                for i in record.items
            ],
            payment_method=PaymentMethod(record.payment_method),
            shipping_address=Address.from_dict(record.shipping_address),
            billing_address=Address.from_dict(record.billing_address),
            shipping_cost=Money(Decimal(record.shipping_cost), currency),
            tax=Money(Decimal(record.tax), currency),
            status=OrderStatus(record.status),
            payment_status=PaymentStatus(record.payment_status),
            created_at=_aware(record.created_at),
            updated_at=_aware(record.updated_at),
        )
