"""
Session seam for the cart.

Authentication lives outside the cart core; the cart only asks whether the
current shopper is signed in before handing the cart to checkout. Host
applications provide the real session by overriding `get_session`:

    app.dependency_overrides[get_session] = my_session_resolver
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Session:
    user_id: Optional[str] = None
    email: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)


ANONYMOUS = Session()


def get_session() -> Session:
    """Default session resolver: every request is anonymous."""
    return ANONYMOUS
