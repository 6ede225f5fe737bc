import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def marketplace_bed():
    from marketplace.domain import marketplace

    bed = DomainFixture(marketplace)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_bed):
    with marketplace_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Actors
# ---------------------------------------------------------------------------
@pytest.fixture()
def register():
    """Register an account and return its id."""
    from marketplace.workflows import register_account

    def _register(username, role="Buyer", email=None):
        account = register_account(username, email or f"{username}@example.com", role)
        return str(account.id)

    return _register


@pytest.fixture()
def authorizer(register):
    from marketplace.workflows import grant_authorizer

    account_id = register("root")
    grant_authorizer(account_id)
    return account_id


@pytest.fixture()
def approve(authorizer):
    """Approve a pending seller registration."""
    from marketplace.workflows import review_seller_registration

    def _approve(seller_id):
        return review_seller_registration(authorizer, seller_id, "approved")

    return _approve


@pytest.fixture()
def seller(register, approve):
    account_id = register("potter", role="Seller")
    approve(account_id)
    return account_id


@pytest.fixture()
def other_seller(register, approve):
    account_id = register("weaver", role="Seller")
    approve(account_id)
    return account_id


@pytest.fixture()
def buyer(register):
    return register("asha")


@pytest.fixture()
def other_buyer(register):
    return register("ravi")


@pytest.fixture()
def make_product(seller):
    """List a product for `seller` (or another seller) and return its id."""
    from marketplace.workflows import add_product

    def _make_product(stock=5, price=100.0, name="Hand-thrown Mug", owner=None, image_urls=None):
        product = add_product(owner or seller, name=name, price=price, stock=stock, image_urls=image_urls)
        return str(product.id)

    return _make_product


@pytest.fixture()
def product(make_product):
    return make_product()
