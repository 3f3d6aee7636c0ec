"""kubepool exceptions."""


class KubepoolException(Exception):
    """Base exception for kubepool errors."""

    message = "An unknown exception occurred."

    def __init__(self, message=None, **kwargs):
        """Initialize exception with optional custom message."""
        self.kwargs = kwargs
        if message:
            self.message = message
        super().__init__(self.message % kwargs if kwargs else self.message)


class ConfigurationError(KubepoolException):
    """Request parameters cannot describe a valid pool cluster."""

    message = "Invalid pool configuration: %(details)s"


class InvalidSchemeError(ConfigurationError):
    """Redundancy scheme name is not recognized."""

    message = "invalid pool type %(pool_type)r, must be one of stripe, mirror, raidz, raidz2"


class GroupArithmeticError(ConfigurationError):
    """Device count does not fit the scheme's redundancy group size."""

    message = "%(pool_type)s pool needs a positive multiple of %(group_size)d devices, got %(devices)s"


class EligibilityError(KubepoolException):
    """Nothing in the cluster can back the requested pools."""

    message = "No eligible storage found: %(details)s"


class NoEligibleDeviceError(EligibilityError):
    """No requested node has an active, unclaimed, unformatted blockdevice."""

    message = "no eligible blockdevices found in nodes %(nodes)s"


class StorageEngineNotFoundError(EligibilityError):
    """Storage engine control plane is not installed."""

    message = "unable to determine the %(cas_type)s namespace, is %(cas_type)s installed?"


class NodeNotFoundError(EligibilityError):
    """Some requested nodes do not exist in the cluster."""

    message = "not all worker nodes are available for provisioning a cspc, missing %(missing)s"


class InsufficientDevicesError(KubepoolException):
    """A requested node does not have enough eligible blockdevices."""

    message = "not enough blockdevices found on node %(node)s, want %(wanted)d, found %(found)d"


class ResourceStoreError(KubepoolException):
    """Kubernetes API call failed."""

    message = "Resource store error: %(details)s"


class VolumeNotFoundError(KubepoolException):
    """Volume or its storage engine resource not found."""

    message = "Volume %(name)s not found"
