"""
Robot assignment: decides which physical robot runs which tactic.

Tactics are given in priority order. The goalie tactic always goes to the
goalie; the remaining robots are matched to the highest priority tactics so
that the summed cost is minimal (Hungarian method). Tactics left over when
we run out of robots stay unassigned.
"""

import numpy as np
from scipy.optimize import linear_sum_assignment

from ai_interface.tactics.tactic import Tactic
from world.world_state import World


def assign_robots(tactics: list[Tactic], world: World) -> dict[int, Tactic]:
    """
    Assign robots to tactics, updating every tactic's assigned robot.

    Args:
        tactics: Tactics in priority order
        world: Current world snapshot

    Returns:
        Mapping from robot id to the tactic it runs
    """
    team = world.friendly_team
    goalie = team.goalie
    robots = [robot for robot in team.robots if goalie is None or robot.id != goalie.id]
    assignments = {}

    field_tactics = []
    for tactic in tactics:
        if not tactic.is_goalie:
            field_tactics.append(tactic)
        elif goalie is not None and goalie.id not in assignments:
            tactic.update_robot(goalie.id)
            assignments[goalie.id] = tactic
        else:
            tactic.update_robot(None)

    to_assign = field_tactics[:len(robots)]
    for tactic in field_tactics[len(robots):]:
        tactic.update_robot(None)

    if to_assign:
        costs = np.array([[tactic.robot_cost(robot, world) for robot in robots]
                          for tactic in to_assign])
        tactic_indices, robot_indices = linear_sum_assignment(costs)
        for tactic_index, robot_index in zip(tactic_indices, robot_indices):
            robot_id = robots[robot_index].id
            to_assign[tactic_index].update_robot(robot_id)
            assignments[robot_id] = to_assign[tactic_index]

    return assignments
