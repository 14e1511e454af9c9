"""Windows administration toolkit: policy template sync, SCHANNEL audit, RSAT installer."""

__version__ = "0.1.0"
