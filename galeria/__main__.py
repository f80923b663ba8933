"""Entry point for python -m galeria

Usage:
  python -m galeria create "Nombre Cliente" CODIGO archivo1.jpg,archivo2.jpg
  python -m galeria create
  python -m galeria delete "Nombre Cliente"
"""

from galeria.cli import main

if __name__ == "__main__":
    main()
