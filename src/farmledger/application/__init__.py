"""
Application layer - Application Business Rules.

This layer contains application-specific business rules, including:
- Interfaces (ports) for infrastructure dependencies
- Use cases: the AuthorityCenter, Farm and ChickenEggTracker contracts
- Application services: event log, hashing, verification, provenance
"""
