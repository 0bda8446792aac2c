import pytest

from app.client import ErrorKind, UserContext

from tests.helpers import TOKENS


@pytest.mark.asyncio
async def test_user_context_filters_and_updates(client, users):
    ctx = UserContext(client, token=TOKENS["admin"])
    assert (await ctx.load_all()).ok
    assert len(ctx.users) == 4

    assert [u["email"] for u in ctx.filtered("SELLER")] == ["seller@example.com"]
    assert [u["role"] for u in ctx.filtered(role="agent")] == ["agent"]
    assert ctx.filtered("buyer", role="admin") == []

    seller_id = users["seller"].id
    assert (await ctx.set_role(seller_id, "agent")).ok
    assert {u["email"] for u in ctx.filtered(role="agent")} == {"agent@example.com", "seller@example.com"}

    assert (await ctx.set_active(seller_id, False)).ok
    assert next(u for u in ctx.users if u["id"] == seller_id)["is_active"] is False


@pytest.mark.asyncio
async def test_user_context_rejections_leave_cache(client, users):
    ctx = UserContext(client, token=TOKENS["admin"])
    await ctx.load_all()
    before = list(ctx.users)

    result = await ctx.set_role(users["admin"].id, "buyer")
    assert result.error is ErrorKind.VALIDATION
    result = await ctx.set_role(users["buyer"].id, "landlord")
    assert result.error is ErrorKind.VALIDATION
    assert result.fields == ["role"]
    assert ctx.users == before

    denied = UserContext(client, token=TOKENS["agent"])
    assert (await denied.load_all()).error is ErrorKind.FORBIDDEN
    assert denied.users == []
