from studel.services import customer_ops, runner_ops, vendor_ops


async def place_sample_order(world, zone=None, now=None):
    """2 x 120 + 1 x 80 from the canteen."""
    return await customer_ops.place_order(
        world.customer,
        [
            {"product_id": world.dosa.id, "quantity": 2},
            {"product_id": world.idli.id, "quantity": 1},
        ],
        (zone or world.zone).id,
        now=now,
    )


async def make_ready(world, order, now=None):
    await vendor_ops.accept_order(world.vendor_staff, order.id, now=now)
    await vendor_ops.start_preparing(world.vendor_staff, order.id, now=now)
    return await vendor_ops.mark_ready(world.vendor_staff, order.id, now=now)


async def deliver(world, order, runner=None, now=None):
    runner = runner or world.runner
    await make_ready(world, order, now=now)
    await runner_ops.accept_delivery(runner, order.id, now=now)
    await runner_ops.mark_arriving(runner, order.id, now=now)
    return await runner_ops.mark_delivered(runner, order.id, now=now)


def assert_invariants(order):
    history = list(order.status_history)
    assert order.final_amount == order.total_price + order.delivery_fee
    assert len(history) >= 1
    assert history[0].status.value == "Placed"
    assert history[-1].status == order.status
