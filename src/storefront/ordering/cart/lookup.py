"""Find or open the cart for the current shopper."""

from protean.utils.globals import current_domain

from storefront.ordering.cart.cart import ShoppingCart


def find_cart(user_id=None, session_id=None) -> ShoppingCart | None:
    """A signed-in user's cart wins over the browser session's guest cart."""
    repo = current_domain.repository_for(ShoppingCart)
    if user_id:
        carts = repo._dao.query.filter(user_id=str(user_id)).all().items
        if carts:
            return carts[0]
        return None
    if session_id:
        carts = [c for c in repo._dao.query.filter(session_id=session_id).all().items if not c.user_id]
        if carts:
            return carts[0]
    return None


def get_or_create_cart(user_id=None, session_id=None) -> ShoppingCart:
    cart = find_cart(user_id=user_id, session_id=session_id)
    if cart is None:
        cart = ShoppingCart.create(user_id=user_id, session_id=session_id)
        current_domain.repository_for(ShoppingCart).add(cart)
    return cart
