#!/usr/bin/env python3
"""Tournament Engine

Runs round-robin tournaments between Connect-4 agents on a square board with
an Elo rating system.
"""

import argparse
import csv
import json
import multiprocessing as mp
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from tqdm import tqdm
import yaml

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from env.connect4 import Connect4Env
from agents import AGENT_BUILDERS
from agents.base import Agent
from engine.board import PIECE_A, PIECE_B, opponent


DEFAULT_CONFIG_FILE = Path("configs/tournament.yaml")

DEFAULT_CONFIG: Dict[str, Any] = {
    'board_size': 7,
    'games_per_pair': 10,
    'num_processes': 1,
    'elo_k': 20,
    'seed': 0,
    'output_dir': 'data',
    'participants': [
        {'name': 'random', 'type': 'random'},
        {'name': 'minimax-d2', 'type': 'minimax', 'depth': 2},
        {'name': 'minimax-d4', 'type': 'minimax', 'depth': 4},
    ],
}


def build_participant(spec: Dict[str, Any], board_size: int, seed: Optional[int]) -> Agent:
    """Build an agent from a participant entry of the config."""
    params = {k: v for k, v in spec.items() if k not in ('name', 'type')}
    params.setdefault('seed', seed)
    agent = AGENT_BUILDERS[spec['type']](size=board_size, **params)
    agent.name = spec['name']
    return agent


def play_game(args: Tuple[Dict[str, Any], Dict[str, Any], int, bool, int, int]) -> Dict[str, Any]:
    """Play a single game between two agents."""
    agent1_spec, agent2_spec, game_id, agent1_starts, board_size, seed = args

    agent1 = build_participant(agent1_spec, board_size, seed + game_id)
    agent2 = build_participant(agent2_spec, board_size, seed + game_id + 1)

    env = Connect4Env(size=board_size)
    env.reset(seed=seed + game_id)

    agent1.reset()
    agent2.reset()

    # Player 1 always moves first
    if agent1_starts:
        players = {PIECE_A: agent1, PIECE_B: agent2}
    else:
        players = {PIECE_A: agent2, PIECE_B: agent1}

    current_player = PIECE_A
    move_count = 0
    forfeit = False

    while not env.game_over:
        agent = players[current_player]
        try:
            action = agent.select_move(env.snapshot(), current_player)
            env.step(action)
        except Exception:
            # Agent failure or illegal move forfeits the game
            forfeit = True
            winner = opponent(current_player)
            break
        move_count += 1
        current_player = env.current_player
    else:
        winner = env.winner

    agent1_piece = PIECE_A if agent1_starts else PIECE_B

    if winner == 0:
        result = 'draw'
        agent1_score = 0.5
        agent2_score = 0.5
    elif winner == agent1_piece:
        result = 'agent1_win'
        agent1_score = 1.0
        agent2_score = 0.0
    else:
        result = 'agent2_win'
        agent1_score = 0.0
        agent2_score = 1.0

    return {
        'game_id': game_id,
        'agent1': agent1_spec['name'],
        'agent2': agent2_spec['name'],
        'agent1_starts': agent1_starts,
        'result': result,
        'winner': winner,
        'forfeit': forfeit,
        'moves': move_count,
        'agent1_score': agent1_score,
        'agent2_score': agent2_score
    }


def calculate_elo_update(rating1: float, rating2: float, score1: float, k: float = 20.0) -> Tuple[float, float]:
    """Calculate Elo rating updates."""
    expected1 = 1.0 / (1.0 + 10**((rating2 - rating1) / 400))
    expected2 = 1.0 - expected1

    new_rating1 = rating1 + k * (score1 - expected1)
    new_rating2 = rating2 + k * ((1.0 - score1) - expected2)

    return new_rating1, new_rating2


def schedule_games(config: Dict[str, Any]) -> List[Tuple[Dict[str, Any], Dict[str, Any], int, bool, int, int]]:
    """Every ordered pair of participants, alternating who starts."""
    participants = config['participants']
    all_games = []

    for i, agent1 in enumerate(participants):
        for j, agent2 in enumerate(participants):
            if i != j:  # Don't play against self
                for game_num in range(config['games_per_pair']):
                    agent1_starts = game_num % 2 == 0
                    all_games.append((
                        agent1, agent2, len(all_games), agent1_starts,
                        config['board_size'], config['seed'],
                    ))

    return all_games


def run_tournament(config: Dict[str, Any]) -> Dict[str, float]:
    """Run the full tournament and return the final Elo ratings."""
    print("Connect-4 Tournament Engine")
    print("=" * 60)

    data_dir = Path(config['output_dir'])
    data_dir.mkdir(parents=True, exist_ok=True)

    agent_names = [p['name'] for p in config['participants']]
    if len(agent_names) < 2:
        raise ValueError(f"Need at least 2 agents to run tournament, got {agent_names}")
    if len(set(agent_names)) != len(agent_names):
        raise ValueError(f"Participant names must be unique: {agent_names}")
    for participant in config['participants']:
        if participant['type'] not in AGENT_BUILDERS or participant['type'] == 'human':
            raise ValueError(f"Unsupported agent type {participant['type']!r}")

    num_processes = config.get('num_processes') or mp.cpu_count()

    print(f"Tournament participants: {agent_names}")
    print(f"Board: {config['board_size']}x{config['board_size']}")
    print(f"Games per matchup: {config['games_per_pair']}")
    print(f"Using {num_processes} processes")

    elo_ratings = {name: 1200.0 for name in agent_names}
    elo_history = []

    all_games = schedule_games(config)
    print(f"Total games to play: {len(all_games)}")

    start_time = time.time()
    results = []

    with tqdm(total=len(all_games), desc="Playing games", unit="game") as pbar:
        if num_processes > 1:
            with mp.Pool(processes=num_processes) as pool:
                for result in pool.imap_unordered(play_game, all_games):
                    results.append(result)
                    pbar.update(1)
        else:
            for game in all_games:
                results.append(play_game(game))
                pbar.update(1)

    tournament_time = time.time() - start_time
    print(f"\nTournament completed in {tournament_time:.1f} seconds")

    # Aggregate results by matchup
    matchup_results = {}

    for result in results:
        agent1, agent2 = result['agent1'], result['agent2']
        key = (agent1, agent2)

        if key not in matchup_results:
            matchup_results[key] = {
                'agent1': agent1,
                'agent2': agent2,
                'wins': 0,
                'losses': 0,
                'draws': 0,
                'forfeits': 0,
                'total_games': 0
            }

        stats = matchup_results[key]
        stats['total_games'] += 1
        stats['forfeits'] += int(result['forfeit'])

        if result['result'] == 'agent1_win':
            stats['wins'] += 1
        elif result['result'] == 'agent2_win':
            stats['losses'] += 1
        else:
            stats['draws'] += 1

    # Sort games by game_id to ensure consistent order
    results.sort(key=lambda x: x['game_id'])

    for result in results:
        agent1, agent2 = result['agent1'], result['agent2']

        elo_ratings[agent1], elo_ratings[agent2] = calculate_elo_update(
            elo_ratings[agent1], elo_ratings[agent2], result['agent1_score'],
            k=config.get('elo_k', 20)
        )

        if result['game_id'] % 100 == 0:
            elo_history.append({
                'game': result['game_id'],
                'ratings': elo_ratings.copy()
            })

    elo_history.append({
        'game': len(results),
        'ratings': elo_ratings.copy()
    })

    results_file = data_dir / "results.json"
    with open(results_file, 'w') as f:
        json.dump(list(matchup_results.values()), f, indent=2)

    elo_file = data_dir / "elo.csv"
    with open(elo_file, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['game'] + sorted(agent_names))
        for entry in elo_history:
            writer.writerow([entry['game']] + [entry['ratings'][name] for name in sorted(agent_names)])

    print("\n" + "=" * 60)
    print("TOURNAMENT RESULTS")
    print("=" * 60)

    sorted_agents = sorted(elo_ratings.items(), key=lambda x: x[1], reverse=True)

    print("\nFinal Elo Ratings:")
    print("-" * 30)
    for rank, (agent, rating) in enumerate(sorted_agents, 1):
        print(f"{rank:2d}. {agent:<14} {rating:7.1f}")

    print("\nHead-to-Head Results:")
    print("-" * 40)
    for stats in matchup_results.values():
        wins, losses, draws = stats['wins'], stats['losses'], stats['draws']
        total = stats['total_games']
        win_rate = wins / total if total > 0 else 0

        print(f"{stats['agent1']} vs {stats['agent2']}: {wins}-{losses}-{draws} ({win_rate:.3f})")

    print(f"\nResults saved to: {results_file}")
    print(f"Elo history saved to: {elo_file}")

    return elo_ratings


def load_config(config_file: Path = DEFAULT_CONFIG_FILE) -> Dict[str, Any]:
    """Load tournament configuration over the defaults."""
    config = dict(DEFAULT_CONFIG)

    if config_file.exists():
        with open(config_file, 'r') as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)
    else:
        print(f"Config file {config_file} not found, using defaults")

    return config


def main() -> None:
    """Main tournament function."""
    parser = argparse.ArgumentParser(description="Connect-4 round-robin tournament")
    parser.add_argument('--config', type=Path, default=DEFAULT_CONFIG_FILE,
                        help="YAML tournament configuration")
    parser.add_argument('--games', type=int, default=None,
                        help="override games per pair")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.games is not None:
        config['games_per_pair'] = args.games

    try:
        run_tournament(config)
    except KeyboardInterrupt:
        print("\nTournament interrupted by user")


if __name__ == "__main__":
    main()
