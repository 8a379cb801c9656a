from .dishka_app import AdaptersProvider, ChannelProvider, GatewaysProvider, ServicesProvider

__all__ = ["AdaptersProvider", "ChannelProvider", "GatewaysProvider", "ServicesProvider"]
