class ProvisionerError(RuntimeError):
    pass
