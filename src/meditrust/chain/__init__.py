"""
Chain - On-chain interaction layer for the MediTrust client.

Provides the async JSON-RPC client, ABI loading and encoding, transaction
building and the contract handle used by ChainRecordClient.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
