"""
Design (models.py)
- Purpose: Define simple, typed data structures for domain entities (Student).
- Inputs: Field values.
- Outputs: Dataclass instances.
- Side effects: None.
"""

from dataclasses import dataclass


@dataclass
class Student:
    """
    Design (Student)
    - Purpose: One row of the roster.
    - Fields:
        name: display name.
        roll_number: integer identifier; not guaranteed unique across the roster.
        grade: free-form grade text (e.g. "A", "B+").
        email: contact address, not validated.
    """
    name: str
    roll_number: int
    grade: str
    email: str

    def __str__(self) -> str:
        return (
            f"Name: {self.name}, Roll Number: {self.roll_number}, "
            f"Grade: {self.grade}, Email: {self.email}"
        )
