"""Mini galaga - arcade shooter session, controller and Gymnasium env"""

from .session import GameSession, SessionPhase
from .controller import GameController
from .galaga_env import GalagaEnv, run_random_episode

__all__ = ['GameSession', 'SessionPhase', 'GameController', 'GalagaEnv', 'run_random_episode']
