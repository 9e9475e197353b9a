"""Chat command interface: parsing inbound lines and whispering replies."""
