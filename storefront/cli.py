"""
数据库维护工具

用法:
    storefront-db migrate          # 建表（已存在则跳过）
    storefront-db seed             # 写入示例数据（已有数据时跳过）
    storefront-db clear --yes      # 删除所有用户和商品
    storefront-db recreate --yes   # 删表后重建
"""

import argparse
import asyncio
import sys
from collections.abc import Callable, Coroutine
from decimal import Decimal
from typing import Any

from loguru import logger
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from storefront.config import get_settings
from storefront.core.database import close_database, create_tables, drop_tables, engine
from storefront.core.exceptions import PersistenceError
from storefront.core.logging import setup_logging
from storefront.core.security import Argon2PasswordHasher
from storefront.core.unit_of_work import UnitOfWork
from storefront.modules.product.models import Product
from storefront.modules.user.models import User

SEED_USERS = [
    ("admin", "admin@example.com", "admin123", "System Administrator"),
    ("testuser", "test@example.com", "test123", "Test User"),
]

SEED_PRODUCTS = [
    ("Laptop", "High-performance laptop", Decimal("999.99"), 10),
    ("Mouse", "Wireless mouse", Decimal("29.99"), 50),
    ("Keyboard", "Mechanical keyboard", Decimal("79.99"), 30),
]


async def migrate() -> None:
    logger.info("Running migrations...")
    await create_tables()
    logger.success("Migrations completed successfully!")


async def clear() -> None:
    """物理删除所有用户和商品（保留表结构）"""
    logger.info("Clearing database...")
    async with engine.begin() as conn:
        await conn.execute(delete(User))
        await conn.execute(delete(Product))
    logger.success("Database cleared successfully!")


async def recreate() -> None:
    logger.info("Dropping tables...")
    await drop_tables()
    logger.info("Creating tables...")
    await create_tables()
    logger.success("Database recreated successfully!")


async def seed() -> bool:
    """写入示例账号和商品，已有数据时跳过并返回 False"""
    hasher = Argon2PasswordHasher()
    async with UnitOfWork() as uow:
        if await uow.users.exists() or await uow.products.exists():
            logger.warning("Data already exists. Skipping seed.")
            return False

        uow.users.add_range(
            [
                User(
                    username=username,
                    email=email,
                    password_hash=hasher.hash(password),
                    full_name=full_name,
                    is_active=True,
                )
                for username, email, password, full_name in SEED_USERS
            ]
        )
        uow.products.add_range(
            [
                Product(
                    name=name,
                    description=description,
                    price=price,
                    stock=stock,
                    category="Electronics",
                )
                for name, description, price, stock in SEED_PRODUCTS
            ]
        )
        count = await uow.save_changes()

    logger.success("Sample data seeded successfully! ({} rows)", count)
    return True


COMMANDS: dict[str, tuple[Callable[[], Coroutine[Any, Any, Any]], bool]] = {
    # 命令名: (执行函数, 是否需要 --yes 确认)
    "migrate": (migrate, False),
    "clear": (clear, True),
    "recreate": (recreate, True),
    "seed": (seed, False),
}


async def _run(command: Callable[[], Coroutine[Any, Any, Any]]) -> None:
    try:
        await command()
    finally:
        await close_database()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storefront-db", description="Storefront database maintenance tool"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("migrate", help="Create missing tables")
    subparsers.add_parser("seed", help="Insert sample users and products")
    for name, help_text in [
        ("clear", "Delete all users and products"),
        ("recreate", "Drop and recreate all tables"),
    ]:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--yes", action="store_true", help="Confirm the destructive operation")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(level=settings.log_level)

    command, destructive = COMMANDS[args.command]
    if destructive and not args.yes:
        logger.warning("Operation cancelled. Re-run with --yes to confirm.")
        return 1

    try:
        asyncio.run(_run(command))
    except (SQLAlchemyError, PersistenceError) as exc:
        logger.error("Error: {}", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
