"""Domain services: accounts, ownership scoping, customers, jobs."""
