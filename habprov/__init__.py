from habprov.provisioner import HabitatProvisioner
from habprov.platforms import Platform
from habprov.errors import ProvisionerError

__version__ = "0.1.0"

__all__ = ["HabitatProvisioner", "Platform", "ProvisionerError"]
