from decimal import Decimal

import pytest

from storefront.core.security import is_valid_email
from storefront.core.unit_of_work import UnitOfWork
from storefront.modules.auth.schemas import LoginRequest, RegisterRequest
from storefront.modules.auth.validator import AuthValidator
from storefront.modules.product.schemas import ProductCreate, ProductUpdate
from storefront.modules.product.validator import ProductValidator
from storefront.modules.user.models import User


class TestProductValidator:
    validator = ProductValidator()

    def test_valid_request(self):
        request = ProductCreate(name="Laptop", price=Decimal("999.99"), stock=10)
        assert self.validator.validate_create(request) == []

    def test_name_required(self):
        request = ProductCreate(name="   ", price=Decimal("1"))
        assert self.validator.validate_create(request) == ["Name is required."]

    def test_field_limits(self):
        request = ProductUpdate(
            name="n" * 201,
            description="d" * 1001,
            category="c" * 101,
            price=Decimal("0"),
            stock=-1,
        )
        assert self.validator.validate_update(request) == [
            "Name must not exceed 200 characters.",
            "Price must be greater than zero.",
            "Stock cannot be negative.",
            "Description must not exceed 1000 characters.",
            "Category must not exceed 100 characters.",
        ]

    def test_negative_price(self):
        request = ProductUpdate(name="Mouse", price=Decimal("-5"))
        assert self.validator.validate_update(request) == ["Price must be greater than zero."]


@pytest.mark.parametrize(
    ("email", "expected"),
    [
        ("alice@example.com", True),
        ("first.last@sub.example.org", True),
        ("not-an-email", False),
        ("missing@", False),
        ("@example.com", False),
        ("two@@example.com", False),
    ],
)
def test_is_valid_email(email, expected):
    assert is_valid_email(email) is expected


def test_validate_login_requires_fields():
    validator = AuthValidator(uow=None)
    assert validator.validate_login(LoginRequest()) == [
        "Username is required.",
        "Password is required.",
    ]


@pytest.mark.asyncio
async def test_validate_register_field_rules(db):
    request = RegisterRequest(username="al", email="nope", password="123")
    async with UnitOfWork() as uow:
        errors = await AuthValidator(uow).validate_register(request)

    assert errors == [
        "Username must be at least 3 characters.",
        "Invalid email format.",
        "Password must be at least 6 characters.",
    ]


@pytest.mark.asyncio
async def test_validate_register_missing_fields(db):
    async with UnitOfWork() as uow:
        errors = await AuthValidator(uow).validate_register(RegisterRequest())

    assert errors == [
        "Username is required.",
        "Email is required.",
        "Password is required.",
    ]


@pytest.mark.asyncio
async def test_validate_register_uniqueness_includes_deleted_users(db):
    async with UnitOfWork() as uow:
        user = User(username="alice", email="alice@example.com", password_hash="x")
        uow.users.add(user)
        await uow.save_changes()
        uow.users.soft_delete(user)
        await uow.save_changes()

    request = RegisterRequest(username="alice", email="alice@example.com", password="secret1")
    async with UnitOfWork() as uow:
        errors = await AuthValidator(uow).validate_register(request)

    assert errors == ["Username is already taken.", "Email is already registered."]


@pytest.mark.parametrize(
    ("price", "expected"),
    [
        (Decimal("0.004"), Decimal("0.00")),
        (Decimal("0.005"), Decimal("0.01")),
        (Decimal("19.999"), Decimal("20.00")),
        (Decimal("12"), Decimal("12.00")),
    ],
)
def test_price_is_quantized_to_cents(price, expected):
    assert ProductCreate(name="Mouse", price=price).price == expected


def test_price_upper_bound():
    validator = ProductValidator()

    assert validator.validate_create(
        ProductCreate(name="Yacht", price=Decimal("9999999999999.99"))
    ) == []
    assert validator.validate_create(
        ProductCreate(name="Yacht", price=Decimal("10000000000000"))
    ) == ["Price must not exceed 9999999999999.99."]


def test_password_whitespace_is_kept():
    assert RegisterRequest(password="  secret1  ").password == "  secret1  "
    assert LoginRequest(password=" secret1").password == " secret1"
    # other strings are still trimmed
    assert RegisterRequest(username="  alice  ").username == "alice"


@pytest.mark.asyncio
async def test_validate_register_password_length_counts_whitespace(db):
    async with UnitOfWork() as uow:
        validator = AuthValidator(uow)
        padded = RegisterRequest(username="alice", email="alice@example.com", password="     x")
        blank = RegisterRequest(username="alice", email="alice@example.com", password="      ")

        assert await validator.validate_register(padded) == []
        assert await validator.validate_register(blank) == ["Password is required."]


@pytest.mark.asyncio
async def test_validate_register_full_name_limit(db):
    request = RegisterRequest(
        username="alice",
        email="alice@example.com",
        password="secret1",
        full_name="n" * 201,
    )
    async with UnitOfWork() as uow:
        errors = await AuthValidator(uow).validate_register(request)

    assert errors == ["Full name must not exceed 200 characters."]
