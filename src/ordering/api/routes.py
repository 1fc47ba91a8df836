"""FastAPI endpoints for the Ordering domain: cart, watchlist and orders."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from identity.api.deps import current_user, require_admin
from identity.user.user import User
from ordering.api.schemas import (
    AddToCartRequest,
    AddToWatchlistRequest,
    CartItemResponse,
    CartLineResponse,
    CheckoutRequest,
    CreateOrderRequest,
    OrderDetailResponse,
    OrderResponse,
    UpdateCartItemRequest,
    UpdateOrderStatusRequest,
    WatchlistEntryResponse,
    WatchlistItemResponse,
)
from ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartQuantity, get_cart, get_cart_item
from ordering.order.checkout import checkout
from ordering.order.creation import CreateOrder, place_order
from ordering.order.order import Order
from ordering.order.queries import get_order_with_items, list_orders
from ordering.order.status import UpdateOrderStatus
from ordering.watchlist.management import (
    AddToWatchlist,
    RemoveFromWatchlist,
    get_watchlist,
    get_watchlist_item,
)
from shared.money import to_paise
from shared.schemas import MessageResponse

cart_router = APIRouter(prefix="/api/cart", tags=["cart"])
watchlist_router = APIRouter(prefix="/api/watchlist", tags=["watchlist"])
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


# --- Cart endpoints ---


@cart_router.get("", response_model=list[CartLineResponse])
async def get_cart_route(user: User = Depends(current_user)) -> list[CartLineResponse]:
    return [CartLineResponse.from_line(line) for line in get_cart(str(user.id))]


@cart_router.post("", status_code=201, response_model=CartItemResponse)
async def add_to_cart(body: AddToCartRequest, user: User = Depends(current_user)) -> CartItemResponse:
    command = AddToCart(
        user_id=str(user.id),
        product_id=body.product_id,
        quantity=body.quantity,
        variant_info=body.variant_json(),
    )
    item_id = current_domain.process(command, asynchronous=False)
    return CartItemResponse.from_item(get_cart_item(str(user.id), item_id))


@cart_router.put("/{cart_item_id}", response_model=CartItemResponse)
async def update_cart_item(
    cart_item_id: str, body: UpdateCartItemRequest, user: User = Depends(current_user)
) -> CartItemResponse:
    command = UpdateCartQuantity(user_id=str(user.id), cart_item_id=cart_item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return CartItemResponse.from_item(get_cart_item(str(user.id), cart_item_id))


@cart_router.delete("/{cart_item_id}", response_model=MessageResponse)
async def remove_from_cart(cart_item_id: str, user: User = Depends(current_user)) -> MessageResponse:
    current_domain.process(RemoveFromCart(user_id=str(user.id), cart_item_id=cart_item_id), asynchronous=False)
    return MessageResponse(message="Item removed from cart")


@cart_router.delete("", response_model=MessageResponse)
async def clear_cart(user: User = Depends(current_user)) -> MessageResponse:
    current_domain.process(ClearCart(user_id=str(user.id)), asynchronous=False)
    return MessageResponse(message="Cart cleared")


# --- Watchlist endpoints ---


@watchlist_router.get("", response_model=list[WatchlistEntryResponse])
async def get_watchlist_route(user: User = Depends(current_user)) -> list[WatchlistEntryResponse]:
    return [WatchlistEntryResponse.from_entry(entry) for entry in get_watchlist(str(user.id))]


@watchlist_router.post("", status_code=201, response_model=WatchlistItemResponse)
async def add_to_watchlist(body: AddToWatchlistRequest, user: User = Depends(current_user)) -> WatchlistItemResponse:
    command = AddToWatchlist(user_id=str(user.id), product_id=body.product_id)
    item_id = current_domain.process(command, asynchronous=False)
    return WatchlistItemResponse.from_item(get_watchlist_item(item_id))


@watchlist_router.delete("/{item_id}", response_model=MessageResponse)
async def remove_from_watchlist(item_id: str, user: User = Depends(current_user)) -> MessageResponse:
    current_domain.process(RemoveFromWatchlist(user_id=str(user.id), item_id=item_id), asynchronous=False)
    return MessageResponse(message="Item removed from watchlist")


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, user: User = Depends(current_user)) -> OrderResponse:
    command = CreateOrder(
        user_id=str(user.id),
        address=body.address,
        items=body.items_json(),
        total_paise=to_paise(body.total),
        payment_method=body.payment_method,
    )
    return OrderResponse.from_order(place_order(command))


@order_router.post("/checkout", status_code=201, response_model=OrderResponse)
async def checkout_route(body: CheckoutRequest, user: User = Depends(current_user)) -> OrderResponse:
    order = checkout(str(user.id), address=body.address, payment_method=body.payment_method)
    return OrderResponse.from_order(order)


@order_router.get("", response_model=list[OrderDetailResponse])
async def get_orders(user: User = Depends(current_user)) -> list[OrderDetailResponse]:
    return [OrderDetailResponse.from_view(view) for view in list_orders(user)]


@order_router.get("/{order_id}", response_model=OrderDetailResponse)
async def get_order(order_id: str, user: User = Depends(current_user)) -> OrderDetailResponse:
    return OrderDetailResponse.from_view(get_order_with_items(user, order_id))


@order_router.put("/{order_id}/status", response_model=OrderResponse, dependencies=[Depends(require_admin)])
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return OrderResponse.from_order(current_domain.repository_for(Order).get(order_id))
