"""Infrastructure modules for the real-time notification core.

Cross-cutting building blocks shared by the feature modules:
- configuration: Settings management (Settings, RetrySettings, CacheSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- exceptions: Error taxonomy shared by every layer
- operations: Operation results returned by external integrations
- cache: Bounded TTL cache and key builder
- resilience: Retry executor and policies
- realtime: Channel parsing, authorization and broker clients
- persistence: Document store protocol and in-memory implementation
- identity: Principal models and token resolution
- services: Dependency providers (get_settings, SettingsDep, ...)

Subpackages are imported explicitly by their consumers.
"""
