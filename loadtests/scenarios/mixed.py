"""Mixed storefront workload scenario.

Combines journeys from every area of the storefront with weights that
model realistic e-commerce traffic. This is the recommended scenario
for load baseline testing.
"""

from locust import HttpUser, between

from loadtests.scenarios.catalogue import BrowsingJourney, CatalogueAdminJourney
from loadtests.scenarios.identity import AccountLifecycleJourney
from loadtests.scenarios.ordering import (
    CartToCheckoutJourney,
    DirectOrderJourney,
    OrderFulfilmentJourney,
)


class MixedWorkloadUser(HttpUser):
    """Realistic mixed workload simulating concurrent storefront activity.

    Browsing (60%): cached catalogue reads dominate real traffic.
    Accounts (10%): signups and profile edits.
    Ordering (25%): cart checkouts and direct orders.
    Back-office (5%): catalogue edits and order fulfilment. Each catalogue
    edit clears the cached listings, so browsing latency spikes after it.
    """

    wait_time = between(0.5, 3.0)
    tasks = {
        BrowsingJourney: 12,
        AccountLifecycleJourney: 2,
        CartToCheckoutJourney: 3,
        DirectOrderJourney: 2,
        CatalogueAdminJourney: 1,
        OrderFulfilmentJourney: 0.5,
    }
