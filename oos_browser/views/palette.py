import plotly.express as px

TABLEAU10 = px.colors.qualitative.T10

MAP_LOW = "#fffed1"
MAP_HIGH = "#e15759"
MAP_NO_DATA = "whitesmoke"
OCEAN = "#76b7b2"
BORDER = "rgba(129,129,129,0.35)"
