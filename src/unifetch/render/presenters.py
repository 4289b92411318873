"""
HTML presenters for the built-in entity lists.
"""

from html import escape
from typing import Callable, List

from ..data.entities import Fruit, Product, User


def _list(title: str, css_class: str, items: List[str]) -> str:
    heading = f"<h3>{escape(title)}</h3>"
    if not items:
        return f'<section class="{css_class}">{heading}<p>No {escape(title.lower())} found.</p></section>'
    body = "".join(f"<li>{item}</li>" for item in items)
    return f'<section class="{css_class}">{heading}<ul>{body}</ul></section>'


def user_list(users: List[User]) -> str:
    return _list(
        "Users",
        "user-list",
        [f"{escape(u.name)} ({escape(u.email)})" for u in users],
    )


def product_list(products: List[Product]) -> str:
    return _list(
        "Products",
        "product-list",
        [
            f"{escape(p.name)} - ${p.price:.2f}: {escape(p.description)}"
            for p in products
        ],
    )


def fruit_list(fruits: List[Fruit]) -> str:
    return _list(
        "Fruits",
        "fruit-list",
        [f"{escape(f.name)} (rich in {escape(f.rich_in)})" for f in fruits],
    )


PRESENTERS: dict = {
    "users": user_list,
    "products": product_list,
    "fruits": fruit_list,
}


def get_presenter(key: str) -> Callable[[list], str]:
    """
    Return the presenter for a collection key.
    """
    if key not in PRESENTERS:
        raise KeyError(f"No presenter for '{key}'. Available: {', '.join(PRESENTERS)}")
    return PRESENTERS[key]
