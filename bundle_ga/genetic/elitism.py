"""
Elitism for genetic algorithm

The best individual of a generation is captured before breeding and written
back over the slot of that generation's worst individual when the offspring
lost it.
"""

from dataclasses import dataclass
from typing import List, Sequence

from .individual import Individual


@dataclass(frozen=True)
class EliteSnapshot:
    """Best individual of a generation and the index of its worst one"""
    elite: Individual
    worst_index: int


class ElitePreservation:
    """Keeps the best individual alive across generations"""

    def capture(self, individuals: Sequence[Individual], fitness: Sequence[float]) -> EliteSnapshot:
        """
        Snapshot the elite before breeding

        Args:
            individuals: Current population
            fitness: Its fitness vector

        Returns:
            Copy of the first best individual, and the index of the first worst one
        """
        if not individuals or len(individuals) != len(fitness):
            raise ValueError("Fitness vector must be aligned with a non-empty population")

        best_index = 0
        worst_index = 0
        for index, value in enumerate(fitness):
            if value > fitness[best_index]:
                best_index = index
            if value < fitness[worst_index]:
                worst_index = index

        return EliteSnapshot(elite=individuals[best_index].copy(), worst_index=worst_index)

    def apply(self, offspring: List[Individual], snapshot: EliteSnapshot) -> bool:
        """
        Reinsert the elite if no offspring carries its genes

        Args:
            offspring: Next generation, modified in place
            snapshot: Elite captured from the previous generation

        Returns:
            True if the elite was inserted
        """
        if any(child.same_genes(snapshot.elite) for child in offspring):
            return False

        offspring[snapshot.worst_index] = snapshot.elite.copy()
        return True
