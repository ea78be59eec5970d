"""Behaviour scripts for the game's entities: player, bot, pumpkin, texts and world map."""