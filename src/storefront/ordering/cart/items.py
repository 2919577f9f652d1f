"""Cart item management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.ordering.cart.cart import ShoppingCart


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    cart_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class MergeGuestCart:
    cart_id = Identifier(required=True)
    guest_session_id = String(required=True, max_length=255)


def _check_stock(product, wanted):
    if product.stock < wanted:
        if product.stock == 0:
            raise ValidationError({"product_id": [f"{product.name} is out of stock"]})
        raise ValidationError({"quantity": [f"Only {product.stock} of {product.name} left in stock"]})


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        product = current_domain.repository_for(Product).get(command.product_id)

        in_cart = next((i.quantity for i in cart.items if str(i.product_id) == str(product.id)), 0)
        _check_stock(product, in_cart + command.quantity)

        cart.add_item(
            product_id=str(product.id),
            name=product.name,
            price=product.price,
            quantity=command.quantity,
            image_url=product.image_url,
        )
        repo.add(cart)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        if command.quantity > 0:
            product = current_domain.repository_for(Product).get(command.product_id)
            _check_stock(product, command.quantity)
        cart.update_quantity(product_id=command.product_id, quantity=command.quantity)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.remove_item(product_id=command.product_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        cart.clear()
        repo.add(cart)

    @handle(MergeGuestCart)
    def merge_guest_cart(self, command):
        """Fold a guest session's lines into a signed-in user's cart and empty the guest cart."""
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.cart_id)
        guests = repo._dao.query.filter(session_id=command.guest_session_id).all().items
        guest = next((c for c in guests if not c.user_id and str(c.id) != str(cart.id)), None)
        if guest is None or not guest.items:
            return 0

        merged = 0
        for item in guest.items:
            cart.add_item(
                product_id=item.product_id,
                name=item.name,
                price=item.price,
                quantity=item.quantity,
                image_url=item.image_url,
            )
            merged += 1
        guest.clear()
        repo.add(cart)
        repo.add(guest)
        return merged
