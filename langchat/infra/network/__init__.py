"""Network infrastructure: OS network path observation."""

from langchat.infra.network.interface_watcher import InterfacePathWatcher, read_network_path

__all__ = ["InterfacePathWatcher", "read_network_path"]
