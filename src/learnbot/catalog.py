"""Fixed subject and topic catalog offered to learners."""
from __future__ import annotations

SUBJECTS_DATA: dict[str, list[str]] = {
    "DSA": ["Arrays", "Linked Lists", "Stacks", "Queues", "Trees", "Graphs", "Hashing", "Sorting", "Searching"],
    "CN": ["OSI Model", "TCP/IP", "HTTP/HTTPS", "DNS", "Routing", "Subnetting", "Socket Programming"],
    "DBMS": ["ER Model", "Relational Algebra", "SQL", "Normalization", "Transactions", "ACID", "Indexing"],
    "OS": ["Processes", "Threads", "CPU Scheduling", "Deadlocks", "Memory Management", "File Systems"],
    "Java": ["Basics", "OOP in Java", "Collections", "Exceptions", "Multithreading", "JDBC"],
    "OOPs": ["Classes & Objects", "Inheritance", "Polymorphism", "Encapsulation", "Abstraction", "Design Patterns"],
}


def list_subjects() -> list[str]:
    return list(SUBJECTS_DATA)


def topics_for(subject: str) -> list[str]:
    return list(SUBJECTS_DATA.get(subject, []))


def is_known_selection(subject: str, topic: str) -> bool:
    return topic in SUBJECTS_DATA.get(subject, [])
