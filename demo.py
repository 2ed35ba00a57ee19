import argparse

from env.connect4 import Connect4Env
from agents.human_cli import HumanCLIAgent
from agents.minimax_agent import MinimaxAgent
from engine.board import PIECE_A, PIECE_B


def play(env, players, watch=False):
    env.reset()

    while not env.game_over:
        agent = players[env.current_player]
        action = agent.select_move(env.snapshot(), env.current_player)

        if not isinstance(agent, HumanCLIAgent):
            result = getattr(agent, "last_result", None)
            if result is not None:
                print(f"{agent.name} plays column {action} (score {result.score}, {result.nodes} nodes)")
            else:
                print(f"{agent.name} plays column {action}")

        env.step(action)

        if watch:
            print(env.render())
            input("Press Enter for next move...")

    print(env.render())
    if env.winner == 0:
        print("\nIt's a draw!")
    else:
        print(f"\n{players[env.winner].name} wins!")


def main():
    parser = argparse.ArgumentParser(description="Play connect-4 against the minimax engine")
    parser.add_argument("--size", type=int, default=7, help="board size (square)")
    parser.add_argument("--depth", type=int, default=4, help="search depth in plies")
    parser.add_argument("--human-first", action="store_true", help="human plays X and moves first")
    parser.add_argument("--watch", action="store_true", help="watch engine vs engine")
    parser.add_argument("--seed", type=int, default=None, help="seed for random tie-breaks")
    args = parser.parse_args()

    print("Connect-4 Demo")
    print("=" * 30)

    env = Connect4Env(size=args.size, render_mode="ansi")
    bot = MinimaxAgent(depth=args.depth, size=args.size, seed=args.seed)

    if args.watch:
        other = MinimaxAgent(name="MinMaxBot-2", depth=args.depth, size=args.size, seed=args.seed)
        players = {PIECE_A: bot, PIECE_B: other}
    elif args.human_first:
        players = {PIECE_A: HumanCLIAgent(), PIECE_B: bot}
    else:
        players = {PIECE_A: bot, PIECE_B: HumanCLIAgent()}

    try:
        play(env, players, watch=args.watch)
    except (KeyboardInterrupt, EOFError):
        print("\nExiting...")


if __name__ == "__main__":
    main()
