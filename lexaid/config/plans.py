"""Subscription plans offered on the billing page."""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    price: str
    duration: str
    cta: str
    monthly: bool = False  # paid month to month; gets an end date one month out
    amount: float = None  # charged at checkout; None means it cannot be bought online
    currency: str = 'USD'
    features: tuple = field(default_factory=tuple)

    @property
    def purchasable(self):
        return self.amount is not None

    def tx_ref_prefix(self):
        """Checkout references look like lexaid-basic-1718000000000"""
        return f'lexaid-{self.id}-'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'duration': self.duration,
            'cta': self.cta,
            'monthly': self.monthly,
            'amount': self.amount,
            'currency': self.currency,
            'purchasable': self.purchasable,
            'features': list(self.features)
        }


PLANS = (
    Plan(
        'trial', 'Free Trial', '$0', 'for the first month', 'Start Free Trial',
        features=(
            'Access to core document types',
            'Up to 5 document drafts',
            'Standard AI drafting assistance',
            'Community support',
        )
    ),
    Plan(
        'basic', 'LexAid Basic', '$19', 'per month', 'Upgrade to Basic', monthly=True, amount=19,
        features=(
            'Access to all document types',
            'Unlimited document drafts',
            'Standard AI drafting assistance',
            'Email support',
        )
    ),
    Plan(
        'pro', 'LexAid Pro', '$49', 'per month', 'Upgrade to Pro', monthly=True, amount=49,
        features=(
            'All Basic plan features',
            'Advanced AI insights & suggestions',
            'Priority email & chat support',
            'Early access to new features',
        )
    ),
    Plan(
        'enterprise', 'LexAid Enterprise', 'Custom', 'contact us', 'Contact Sales',
        features=(
            'All Pro plan features',
            'Team collaboration tools',
            'Custom integrations',
            'Dedicated account manager',
        )
    ),
)

_BY_ID = {plan.id: plan for plan in PLANS}


def get_plan(plan_id):
    return _BY_ID.get(plan_id)
