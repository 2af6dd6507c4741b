"""
Commands - CLI command implementations for the MediTrust client.

- address:  Show, set or clear the persisted contract address
- records:  Add records and list/fetch them
- access:   Grant, revoke and check a doctor's access to a record
"""
