"""
Application Layer

Contains use cases as command/query handlers. This layer orchestrates
domain objects and repositories: fetch an aggregate, mutate it, store it,
then publish the resulting domain events.

Structure:
- commands/: CQRS write operations (JoinChatroomCommand, PlayNextCommand, etc.)
- queries/: CQRS read operations (ListWaitlistQuery)
"""
