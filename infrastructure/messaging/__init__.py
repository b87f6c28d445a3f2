from .service_bus import (
    ConfigurationError,
    MessageHandler,
    MessageProcessorOptions,
    MessageReceiveOptions,
    QueueOperationError,
    ServiceBusQueueClient,
)

__all__ = [
    "ConfigurationError",
    "MessageHandler",
    "MessageProcessorOptions",
    "MessageReceiveOptions",
    "QueueOperationError",
    "ServiceBusQueueClient",
]
