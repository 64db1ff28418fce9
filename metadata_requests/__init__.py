"""
Metadata Requests - governance of off-chain asset metadata changes

A request bundles typed sub-requests against a single asset record
(a DID inside an owning collection). The collection owner votes on each
sub-request, the requester may cancel, and a finalize step turns the
accumulated tallies into a terminal decision inside a one-week window.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
