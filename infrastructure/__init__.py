"""
Infrastructure Package - Azure SDK Access Layer.

Provides repository wrappers around the Azure SDK clients with lazy loading,
so importing the package does not import the Azure SDKs or read credentials.

    from infrastructure import RepositoryFactory
    repos = RepositoryFactory.create_management_repositories(config.auth)

Exports:
    RepositoryFactory, ManagementRepositories: Factory and repository bundle
    ResourceGroupRepository: Resource group lifecycle
    StorageAccountRepository: Auto-storage account lifecycle and keys
    BatchManagementRepository: Batch accounts, applications, keys, quota
    BatchServiceRepository, TaskPage: Pools, jobs and tasks (data plane)
    ManagementCredential, get_management_credential: Authentication
"""

_LAZY_IMPORTS = {
    'RepositoryFactory': '.factory',
    'ManagementRepositories': '.factory',
    'ResourceGroupRepository': '.resource_groups',
    'StorageAccountRepository': '.storage_accounts',
    'BatchManagementRepository': '.batch_management',
    'BatchServiceRepository': '.batch_service',
    'TaskPage': '.batch_service',
    'ManagementCredential': '.credentials',
    'get_management_credential': '.credentials',
}


def __getattr__(name):
    """Lazy import repository classes on first access."""
    if name in _LAZY_IMPORTS:
        from importlib import import_module
        module = import_module(_LAZY_IMPORTS[name], package='infrastructure')
        return getattr(module, name)
    raise AttributeError(f"module 'infrastructure' has no attribute '{name}'")


__all__ = list(_LAZY_IMPORTS)
