"""Shared click options that identify the caller."""

from __future__ import annotations

import functools

import click

from storefront.application.dto import Actor


def actor_options(func):
    """Add ``--buyer``/``--seller``/``--email``/``--name`` and pass ``actor``."""

    @click.option("--buyer", "buyer_id", default=None, help="Act as this buyer ID.")
    @click.option("--seller", "seller_id", default=None, help="Act as this seller ID.")
    @click.option("--email", default="", help="Caller e-mail.")
    @click.option("--name", "actor_name", default="", help="Caller display name.")
    @functools.wraps(func)
    def wrapper(buyer_id, seller_id, email, actor_name, **kwargs):
        if buyer_id and seller_id:
            raise click.UsageError("Use either --buyer or --seller, not both.")
        if buyer_id:
            actor = Actor.buyer(buyer_id, email, actor_name)
        elif seller_id:
            actor = Actor.seller(seller_id, email, actor_name)
        else:
            actor = Actor.anonymous()
        return func(actor=actor, **kwargs)

    return wrapper
