from dishka import Provider as DishkaProvider


class Provider(DishkaProvider):
    """Base for all SLA DI providers."""
