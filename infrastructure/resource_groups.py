"""
Resource Group Repository.

Thin wrapper over azure-mgmt-resource for the resource group lifecycle
the workflow needs: existence check, create, delete.

Exports:
    ResourceGroupRepository
"""

from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "ResourceGroupRepository")


class ResourceGroupRepository:
    """
    Resource group operations.

    Args:
        client: azure.mgmt.resource.ResourceManagementClient
    """

    def __init__(self, client):
        self.client = client

    def exists(self, name: str) -> bool:
        return bool(self.client.resource_groups.check_existence(name))

    def create(self, name: str, region: str):
        """Create or update the resource group in the region."""
        logger.info(f"📁 Creating resource group {name} in {region}")
        try:
            group = self.client.resource_groups.create_or_update(name, {'location': region})
        except Exception as e:
            logger.error(
                f"❌ Failed to create resource group {name}: {e}",
                extra={'custom_dimensions': {
                    'error_source': 'infrastructure',
                    'error_type': type(e).__name__,
                    'resource_group': name,
                }}
            )
            raise
        logger.info(f"✅ Resource group ready: {name}")
        return group

    def delete(self, name: str) -> None:
        """Delete the resource group and block until the deletion completes."""
        logger.info(f"🗑️ Deleting Resource Group: {name}")
        self.client.resource_groups.begin_delete(name).result()
        logger.info(f"✅ Deleted Resource Group: {name}")
